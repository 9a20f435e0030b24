from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time


@dataclass(frozen=True)
class DraftBooking:
    scheduled_at: datetime
    selected_service_ids: frozenset[str] = field(default_factory=frozenset)
    total_price: int = 0  # derived from selected_service_ids, see reduce_draft

    @property
    def date(self) -> date:
        return self.scheduled_at.date()

    @property
    def time(self) -> time:
        return self.scheduled_at.timetz()


@dataclass(frozen=True)
class BookingConfirmation:
    booking_id: str
    date: str
    time: str
    services: tuple[str, ...]
    total_price: int
