# booking_api/services/scheduling/timeutils.py
"""
Time arithmetic: "HH:MM" strings ↔ minute offsets, interval overlap,
calendar-day date arithmetic.

All intervals are half-open [start, end) in minutes since midnight.
Dates are plain datetime.date values, so no DST shift can leak in.
"""

import re
from datetime import date, timedelta

from ...errors import MalformedDateError, MalformedTimeError

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_DE_DATE_RE = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_WEEKDAYS_DE = ["Sonntag", "Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag"]


def to_minutes(value: str) -> int:
    """Convert "H:MM", "HH:MM" or "HH:MM:SS" to minutes since midnight."""
    if not isinstance(value, str):
        raise MalformedTimeError(f"Invalid time: {value!r}")
    match = _TIME_RE.match(value.strip())
    if not match:
        raise MalformedTimeError(f"Invalid time format: {value!r}. Use HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise MalformedTimeError(f"Time out of range: {value!r}")
    return hour * 60 + minute


def to_time_string(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:MM"."""
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise MalformedTimeError(f"Minute offset out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_end_minutes(value: str) -> int:
    """Like to_minutes, but also accepts "24:00" as the end of the day."""
    if isinstance(value, str) and value.strip() in ("24:00", "24:00:00"):
        return MINUTES_PER_DAY
    return to_minutes(value)


def to_end_time_string(minutes: int) -> str:
    """Interval end as "HH:MM"; an end at midnight is "24:00"."""
    if minutes == MINUTES_PER_DAY:
        return "24:00"
    return to_time_string(minutes)


def normalize_time(value: str) -> str:
    """"9:30" → "09:30", "09:30:00" → "09:30"."""
    return to_time_string(to_minutes(value))


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open overlap test: touching endpoints do not overlap."""
    return start_a < end_b and end_a > start_b


def parse_date(value: str) -> date:
    """Parse "DD.MM.YYYY" (also "D.M.YYYY") or "YYYY-MM-DD"."""
    if not isinstance(value, str):
        raise MalformedDateError(f"Invalid date: {value!r}")
    text = value.strip()

    match = _DE_DATE_RE.match(text)
    if match:
        day, month, year = (int(g) for g in match.groups())
    else:
        match = _ISO_DATE_RE.match(text)
        if not match:
            raise MalformedDateError(f"Invalid date format: {value!r}. Use DD.MM.YYYY")
        year, month, day = (int(g) for g in match.groups())

    try:
        return date(year, month, day)
    except ValueError:
        raise MalformedDateError(f"Invalid date: {value!r}") from None


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def format_date_de(value: date) -> str:
    """date(2026, 10, 20) → "Dienstag, 20.10.2026"."""
    weekday = _WEEKDAYS_DE[value.isoweekday() % 7]
    return f"{weekday}, {value.day:02d}.{value.month:02d}.{value.year}"


def format_range(start: int, end: int) -> str:
    """(600, 630) → "10:00-10:30". An end at midnight renders as 24:00."""
    return f"{to_time_string(start)}-{to_end_time_string(end)}"
