"""
Fiscal Calendar Module

Derives Estron fiscal months and weeks from calendar dates.

Fiscal month N runs from the 21st of Gregorian month N-1 through the 20th
of Gregorian month N. Week 1 runs from the fiscal month start to the
following Sunday; every later week runs Monday to Sunday, and the last
week is cut at the fiscal month end.
"""

from datetime import date
from typing import List

from .date_utils import DateLike, add_days, each_day_of_interval, end_of_week, normalize_date
from .entities import FiscalMonthPeriod, FiscalWeekPeriod, VisibleWeeks
from .errors import InternalConsistencyError

FISCAL_MONTH_START_DAY = 21
FISCAL_MONTH_END_DAY = 20


def resolve_fiscal_month(value: DateLike) -> FiscalMonthPeriod:
    """
    Get the fiscal month enclosing a date.

    Args:
        value: Any calendar date (time-of-day is ignored)

    Returns:
        FiscalMonthPeriod covering the date
    """
    d = normalize_date(value)
    year, month = d.year, d.month

    if d.day >= FISCAL_MONTH_START_DAY:
        fiscal_month = month + 1
        start_date = date(year, month, FISCAL_MONTH_START_DAY)
        if month == 12:
            end_date = date(year + 1, 1, FISCAL_MONTH_END_DAY)
        else:
            end_date = date(year, month + 1, FISCAL_MONTH_END_DAY)
    else:
        fiscal_month = month
        end_date = date(year, month, FISCAL_MONTH_END_DAY)
        if month == 1:
            start_date = date(year - 1, 12, FISCAL_MONTH_START_DAY)
        else:
            start_date = date(year, month - 1, FISCAL_MONTH_START_DAY)

    if fiscal_month > 12:
        fiscal_month -= 12

    return FiscalMonthPeriod(
        calendar_year=start_date.year,
        calendar_month=start_date.month,
        fiscal_month=fiscal_month,
        start_date=start_date,
        end_date=end_date,
    )


def partition_into_weeks(period: FiscalMonthPeriod) -> List[FiscalWeekPeriod]:
    """
    Split a fiscal month into Monday-start weeks.

    Args:
        period: The fiscal month to split

    Returns:
        Weeks in order, week_index starting at 1, covering the month with
        no gaps or overlaps
    """
    weeks: List[FiscalWeekPeriod] = []
    week_start = period.start_date
    week_index = 1

    while True:
        week_end = min(end_of_week(week_start), period.end_date)
        weeks.append(FiscalWeekPeriod(
            week_index=week_index,
            start_date=week_start,
            end_date=week_end,
            days=tuple(each_day_of_interval(week_start, week_end)),
        ))
        if week_end == period.end_date:
            break
        week_start = add_days(week_end, 1)
        week_index += 1

    return weeks


def get_visible_weeks(value: DateLike) -> VisibleWeeks:
    """
    Get the fiscal month, current week and weeks shown for a reference date.

    Weeks that start after the reference date are excluded.

    Raises:
        InternalConsistencyError: If no computed week contains the date
    """
    target = normalize_date(value)
    fiscal_month = resolve_fiscal_month(target)
    all_weeks = partition_into_weeks(fiscal_month)

    current_week = next((w for w in all_weeks if w.contains(target)), None)
    if current_week is None:
        raise InternalConsistencyError(
            f"{target} is not covered by the weeks of {fiscal_month.name}"
        )

    visible = [
        w for w in all_weeks
        if w.start_date <= target or w.week_index == current_week.week_index
    ]

    return VisibleWeeks(
        fiscal_month=fiscal_month,
        current_week=current_week,
        all_weeks=tuple(all_weeks),
        visible_weeks=tuple(sorted(visible, key=lambda w: w.week_index)),
    )
