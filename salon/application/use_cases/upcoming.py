from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Callable, Iterable

from salon.application.exceptions import MalformedRecordError
from salon.application.utils.date_parser import combine_booking_instant
from salon.domain.entities.booking_record import BookingRecord

logger = logging.getLogger(__name__)

MalformedReporter = Callable[[MalformedRecordError], None]


@dataclass(frozen=True)
class BookingPartition:
    upcoming: list[BookingRecord] = field(default_factory=list)  # ascending by instant
    past: list[BookingRecord] = field(default_factory=list)  # upstream order
    malformed: list[MalformedRecordError] = field(default_factory=list)


def derive_instant(record: BookingRecord, now: datetime, timezone: tzinfo | None = None) -> datetime:
    """
    Comparison instant for a record, aligned with `now` so the two compare.

    The structured timestamp wins when present; otherwise date and time strings
    are combined and read in now's timezone. Raises ValueError when neither works.
    """
    scheduled = record.scheduled_at
    if isinstance(scheduled, str):
        scheduled = datetime.fromisoformat(scheduled.replace("Z", "+00:00"))
    if scheduled is not None and not isinstance(scheduled, datetime):
        raise ValueError(f"unsupported timestamp type {type(scheduled).__name__}")

    if scheduled is not None:
        if now.tzinfo is None and scheduled.tzinfo is not None:
            return scheduled.astimezone(timezone).replace(tzinfo=None)
        if now.tzinfo is not None and scheduled.tzinfo is None:
            return scheduled.replace(tzinfo=now.tzinfo)
        return scheduled

    if not record.date.strip() or not record.time.strip():
        raise ValueError("missing date or time")
    return combine_booking_instant(record.date, record.time, now.tzinfo)


def partition_bookings(
    records: Iterable[BookingRecord],
    now: datetime,
    report: MalformedReporter | None = None,
    timezone: tzinfo | None = None,
) -> BookingPartition:
    """Split records into upcoming (strictly after now), past and malformed."""
    upcoming: list[tuple[datetime, BookingRecord]] = []
    past: list[BookingRecord] = []
    malformed: list[MalformedRecordError] = []

    for record in records:
        try:
            instant = derive_instant(record, now, timezone)
        except (ValueError, TypeError) as e:
            error = MalformedRecordError(record.id, str(e))
            logger.warning(
                "Skipping malformed booking record",
                extra={"record_id": record.id, "reason": error.reason},
            )
            if report is not None:
                report(error)
            malformed.append(error)
            continue

        if instant > now:
            upcoming.append((instant, record))
        else:
            past.append(record)

    upcoming.sort(key=lambda item: item[0])
    return BookingPartition(
        upcoming=[record for _, record in upcoming],
        past=past,
        malformed=malformed,
    )


def filter_upcoming(
    records: Iterable[BookingRecord],
    now: datetime,
    report: MalformedReporter | None = None,
    timezone: tzinfo | None = None,
) -> list[BookingRecord]:
    return partition_bookings(records, now, report=report, timezone=timezone).upcoming
