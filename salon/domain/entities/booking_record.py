from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

BOOKING_STATUS_PENDING = "pending"


@dataclass(frozen=True)
class NewBookingRecord:
    user_id: str
    user_email: str | None
    date: str  # YYYY-MM-DD
    time: str  # HH:MM AM/PM
    services: tuple[str, ...]
    total_price: int
    created_at: datetime
    status: str = BOOKING_STATUS_PENDING

    def to_document(self) -> dict:
        return {
            "userId": self.user_id,
            "userEmail": self.user_email,
            "date": self.date,
            "time": self.time,
            "services": list(self.services),
            "totalPrice": self.total_price,
            "status": self.status,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class BookingRecord:
    id: str
    user_id: str
    user_email: str | None = None
    services: tuple[str, ...] = ()
    date: str = ""
    time: str = ""
    total_price: int = 0
    status: str = BOOKING_STATUS_PENDING
    created_at: datetime | None = None
    scheduled_at: datetime | None = None  # structured timestamp, when the document carries one

    @staticmethod
    def from_document(record_id: str, data: dict) -> "BookingRecord":
        services = data.get("services") or ()
        if isinstance(services, str):
            # older documents stored a comma-joined string
            services = [s.strip() for s in services.split(",") if s.strip()]
        return BookingRecord(
            id=record_id,
            user_id=str(data.get("userId") or ""),
            user_email=data.get("userEmail"),
            services=tuple(services),
            date=str(data.get("date") or ""),
            time=str(data.get("time") or ""),
            total_price=parse_total_price(data.get("totalPrice")),
            status=str(data.get("status") or BOOKING_STATUS_PENDING),
            created_at=data.get("createdAt"),
            scheduled_at=data.get("scheduledAt") or data.get("timestamp"),
        )


def parse_total_price(value: object) -> int:
    """Stored totals may be ints, floats or numeric strings ("500", "500.0"). Raises ValueError."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"invalid total price {value!r}")
    if isinstance(value, int):
        return value
    amount = float(value) if isinstance(value, (float, str)) else None
    if amount is None or amount < 0 or not amount.is_integer():
        raise ValueError(f"invalid total price {value!r}")
    return int(amount)
