from __future__ import annotations

import re
from datetime import date, datetime, time, tzinfo

# Formatting is done by hand so output never depends on the process locale.
DATE_PATTERN = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?$")
TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([ap]\.?m\.?)?\s*$", re.IGNORECASE)


def format_booking_date(value: date | datetime) -> str:
    """YYYY-MM-DD"""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_booking_time(value: time | datetime) -> str:
    """12-hour clock with AM/PM, e.g. '09:30 AM'."""
    hour_12 = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour_12:02d}:{value.minute:02d} {suffix}"


def parse_booking_date(text: str) -> date:
    """
    Parse a stored booking date. Accepts YYYY-MM-DD or a full ISO date-time
    (only the calendar date is kept). Raises ValueError.
    """
    match = DATE_PATTERN.match(text or "")
    if not match:
        raise ValueError(f"unrecognised date {text!r}")
    year, month, day = (int(g) for g in match.groups())
    return date(year, month, day)


def parse_booking_time(text: str) -> time:
    """Parse '10:00 AM', '10:00:00 PM', '14:30' or '14:30:05'. Raises ValueError."""
    match = TIME_PATTERN.match(text or "")
    if not match:
        raise ValueError(f"unrecognised time {text!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    second = int(match.group(3)) if match.group(3) else 0
    am_pm = match.group(4).replace(".", "").lower() if match.group(4) else None

    if am_pm is not None:
        if not 1 <= hour <= 12:
            raise ValueError(f"hour out of range in {text!r}")
        if am_pm == "pm" and hour != 12:
            hour += 12
        elif am_pm == "am" and hour == 12:
            hour = 0

    return time(hour, minute, second)


def combine_booking_instant(date_text: str, time_text: str, tz: tzinfo | None = None) -> datetime:
    """Combine stored date and time strings into one instant in tz (naive when tz is None)."""
    return datetime.combine(parse_booking_date(date_text), parse_booking_time(time_text), tzinfo=tz)
