from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from salon.application.exceptions import PersistenceFailureError, RecordNotFoundError
from salon.application.ports.booking_store import BookingStorePort
from salon.domain.entities.booking_record import BookingRecord, NewBookingRecord
from salon.domain.entities.profile import UserProfile


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._bookings: dict[str, dict[str, Any]] = {}
        self._users: dict[str, dict[str, Any]] = {}
        self._logger = logging.getLogger(__name__)

    async def create_booking_record(self, record: NewBookingRecord) -> str:
        if not record.user_id:
            raise PersistenceFailureError("Missing or insufficient permissions.")
        record_id = uuid.uuid4().hex[:20]
        self._bookings[record_id] = record.to_document()
        self._logger.info("Booking stored", extra={"record_id": record_id, "user_id": record.user_id})
        return record_id

    async def query_bookings_by_user(self, user_id: str) -> list[BookingRecord]:
        records: list[BookingRecord] = []
        for record_id, data in self._bookings.items():
            if data.get("userId") != user_id:
                continue
            try:
                records.append(BookingRecord.from_document(record_id, data))
            except (ValueError, TypeError) as e:
                self._logger.warning("Unreadable booking document", extra={"record_id": record_id, "error": str(e)})
        return records

    async def get_user_profile(self, user_id: str) -> UserProfile:
        data = self._users.get(user_id)
        if data is None:
            raise RecordNotFoundError(f"User not found: {user_id}")
        return UserProfile.from_document(data)

    async def create_user_profile(self, uid: str, name: str, email: str) -> None:
        self._users[uid] = {
            "uid": uid,
            "name": name,
            "email": email,
            "createdAt": datetime.now(timezone.utc),
        }

    def put_booking_document(self, record_id: str, data: dict[str, Any]) -> None:
        """Seed a raw document, e.g. one written by an older client."""
        self._bookings[record_id] = dict(data)
