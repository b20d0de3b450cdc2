# backend/modules/bookings/utils/time_utils.py

"""
Calendar and time-of-day helpers shared by the booking engine.

Slot times travel through the system as ``"HH:MM"`` strings (24-hour clock),
matching how restaurants configure them. These helpers validate and
normalise such strings and do the small amount of arithmetic the engine
needs for turning-time overlap checks.
"""

import re
from datetime import date, timedelta
from typing import Optional

WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_time_string(value: str) -> int:
    """Return minutes after midnight for an ``H:MM`` / ``HH:MM`` string.

    Raises ValueError for anything that is not a valid 24-hour time of day.
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid time value: {value!r}")
    match = _TIME_RE.match(value)
    if not match:
        raise ValueError(f"Invalid time format: {value!r} (expected HH:MM)")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time of day: {value!r}")
    return hours * 60 + minutes


def normalize_time_string(value: str) -> str:
    """Return the canonical zero-padded ``HH:MM`` form of a time string."""
    total = parse_time_string(value)
    return f"{total // 60:02d}:{total % 60:02d}"


def weekday_name(target_date: date) -> str:
    """English weekday name used as the schedule key, e.g. ``"Monday"``."""
    return WEEKDAYS[target_date.weekday()]


def normalize_weekday(value: str) -> Optional[str]:
    """Map a case-insensitive weekday name to its canonical form."""
    lowered = value.strip().lower()
    for day in WEEKDAYS:
        if day.lower() == lowered:
            return day
    return None


def is_within_booking_window(
    target_date: date, today: date, advance_booking_days: int
) -> bool:
    """True when ``target_date`` lies in ``[today, today + advance_booking_days]``."""
    return today <= target_date <= today + timedelta(days=advance_booking_days)


def windows_overlap(start_a: int, start_b: int, duration: int) -> bool:
    """Whether ``[a, a+duration)`` and ``[b, b+duration)`` intersect.

    Both windows share the same length, so they overlap exactly when their
    starts are closer than ``duration`` minutes.
    """
    return abs(start_a - start_b) < duration
