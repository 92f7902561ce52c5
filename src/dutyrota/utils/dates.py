"""
Calendar Utilities
==================
Pure date arithmetic on calendar dates.

Weekdays follow the Sunday-first convention used throughout the scheduler
settings (0=Sunday .. 6=Saturday), unlike ``date.weekday()`` (0=Monday).
A plain ``datetime.date`` is the canonical value; datetimes are normalized
to their UTC calendar day before any comparison.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Union

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

ISO_FORMAT = "%Y-%m-%d"

DateLike = Union[date, datetime, str]


def sunday_weekday(d: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % 7


def to_utc_date(value: DateLike) -> date:
    """
    Normalize a date-like value to its UTC calendar date.

    Accepts ``date``, ``datetime`` (aware values are converted to UTC, naive
    values are taken as already UTC) or an ISO ``YYYY-MM-DD`` string.

    Raises:
        ValueError: if the value cannot be interpreted as a calendar date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip(), ISO_FORMAT).date()
    raise ValueError(f"Not a date: {value!r}")


def format_iso(d: date) -> str:
    """Format as YYYY-MM-DD."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def monday_before(d: date) -> date:
    """Monday on or before ``d``."""
    return d - timedelta(days=(sunday_weekday(d) + 6) % 7)


def friday_after(d: date) -> date:
    """Friday on or after ``d``; Saturday moves forward six days, never back."""
    dow = sunday_weekday(d)
    diff = 6 if dow == 6 else (5 - dow + 7) % 7
    return d + timedelta(days=diff)


def spans_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Inclusive interval overlap test."""
    return start_a <= end_b and end_a >= start_b
