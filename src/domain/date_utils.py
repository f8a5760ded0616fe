"""
Date Utilities Module

Calendar-day primitives used by the fiscal calendar engine and the
display helpers used by reports. Every function is pure; the only clock
read lives in get_today(), which callers invoke once at the boundary.
"""

from datetime import date, datetime, timedelta
from typing import List, Union

from .errors import InvalidRangeError

DateLike = Union[date, datetime]

# getDay-style index: 0 = Sunday, 1 = Monday, ..., 6 = Saturday
SUNDAY = 0
SATURDAY = 6

VIETNAMESE_WEEKDAYS = [
    "Chủ Nhật", "Thứ 2", "Thứ 3", "Thứ 4", "Thứ 5", "Thứ 6", "Thứ 7"
]


def normalize_date(value: DateLike) -> date:
    """Drop any time-of-day so comparisons happen at calendar-day granularity."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_before(a: DateLike, b: DateLike) -> bool:
    return normalize_date(a) < normalize_date(b)


def is_after(a: DateLike, b: DateLike) -> bool:
    return normalize_date(a) > normalize_date(b)


def is_same_day(a: DateLike, b: DateLike) -> bool:
    return normalize_date(a) == normalize_date(b)


def day_of_week(value: DateLike) -> int:
    """
    Get the weekday index of a date.

    Returns:
        0 for Sunday through 6 for Saturday
    """
    # date.weekday() is 0=Mon..6=Sun
    return (normalize_date(value).weekday() + 1) % 7


def add_days(value: DateLike, days: int) -> date:
    return normalize_date(value) + timedelta(days=days)


def end_of_week(value: DateLike) -> date:
    """Get the Sunday closing the Monday-start week that contains value."""
    d = normalize_date(value)
    return d + timedelta(days=6 - d.weekday())


def each_day_of_interval(start: DateLike, end: DateLike) -> List[date]:
    """
    List every calendar day from start to end inclusive.

    Raises:
        InvalidRangeError: If start is after end
    """
    start_day = normalize_date(start)
    end_day = normalize_date(end)
    if start_day > end_day:
        raise InvalidRangeError(start_day, end_day)

    days = []
    current = start_day
    while current <= end_day:
        days.append(current)
        current += timedelta(days=1)
    return days


def get_today() -> date:
    """Current local calendar day. Only call at the application boundary."""
    return date.today()


# ==============================================================================
# Formatting
# ==============================================================================
def format_date(value: DateLike, fmt: str = "%d/%m/%Y") -> str:
    return normalize_date(value).strftime(fmt)


def to_iso_string(value: DateLike) -> str:
    """Format as YYYY-MM-DD, the key format used by stored records."""
    return normalize_date(value).isoformat()


def parse_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    return date.fromisoformat(value.strip())


def get_day_of_week_vietnamese(value: DateLike) -> str:
    return VIETNAMESE_WEEKDAYS[day_of_week(value)]


def format_to_day_of_week_and_date(value: DateLike) -> str:
    """e.g. 'Thứ 5, 25/04'."""
    return f"{get_day_of_week_vietnamese(value)}, {format_date(value, '%d/%m')}"
