"""
Workday Calculator Module

Counts standard workdays over a date range.
Monday-Friday count as one workday, Saturday as half, Sunday as none.
"""

from decimal import Decimal
from types import MappingProxyType

from .date_utils import DateLike, SATURDAY, SUNDAY, day_of_week, each_day_of_interval
from .entities import DayClass

WORKDAY_WEIGHTS = MappingProxyType({
    DayClass.WEEKDAY: Decimal("1"),
    DayClass.SATURDAY: Decimal("0.5"),
    DayClass.SUNDAY: Decimal("0"),
})


def classify_day(value: DateLike) -> DayClass:
    index = day_of_week(value)
    if index == SUNDAY:
        return DayClass.SUNDAY
    if index == SATURDAY:
        return DayClass.SATURDAY
    return DayClass.WEEKDAY


def workday_weight(value: DateLike) -> Decimal:
    return WORKDAY_WEIGHTS[classify_day(value)]


def count_standard_workdays(start: DateLike, end: DateLike) -> Decimal:
    """
    Sum the workday weights of every day from start to end inclusive.

    Args:
        start: First day of the range
        end: Last day of the range

    Returns:
        Weighted workday count, exact to the half day

    Raises:
        InvalidRangeError: If start is after end
    """
    return sum(
        (workday_weight(d) for d in each_day_of_interval(start, end)),
        Decimal(0),
    )


def format_workdays(value: Decimal) -> str:
    """Display form of a workday count: 23.0 -> "23", 4.50 -> "4.5"."""
    return f"{value.normalize():f}"
