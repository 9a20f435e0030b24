from __future__ import annotations

from abc import ABC, abstractmethod

from salon.domain.entities.booking_record import BookingRecord, NewBookingRecord
from salon.domain.entities.profile import UserProfile


class BookingStorePort(ABC):
    @abstractmethod
    async def create_booking_record(self, record: NewBookingRecord) -> str:
        """
        Append one immutable record to the bookings collection.
        Returns the store-assigned id. Raises PersistenceFailureError.
        """
        raise NotImplementedError

    @abstractmethod
    async def query_bookings_by_user(self, user_id: str) -> list[BookingRecord]:
        """Equality filter on userId. No ordering guaranteed."""
        raise NotImplementedError

    @abstractmethod
    async def get_user_profile(self, user_id: str) -> UserProfile:
        """
        Fetch users/{user_id}.
        Raises RecordNotFoundError if absent, PersistenceFailureError on transport error.
        """
        raise NotImplementedError

    @abstractmethod
    async def create_user_profile(self, uid: str, name: str, email: str) -> None:
        raise NotImplementedError
