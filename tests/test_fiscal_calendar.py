"""
Unit tests for the Estron fiscal month resolver, week partitioner and
visible-week selector.
"""

import pytest
from datetime import date, datetime, timedelta
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import FiscalMonthPeriod
from domain.fiscal_calendar import (
    resolve_fiscal_month, partition_into_weeks, get_visible_weeks
)


def _all_days(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


ALL_DAYS_2023_2025 = list(_all_days(date(2023, 1, 1), date(2025, 12, 31)))


class TestResolveFiscalMonth:
    """Tests for resolve_fiscal_month."""

    def test_day_20_closes_fiscal_month(self):
        """2024-04-20 is the last day of fiscal month 4."""
        period = resolve_fiscal_month(date(2024, 4, 20))

        assert period.fiscal_month == 4
        assert period.start_date == date(2024, 3, 21)
        assert period.end_date == date(2024, 4, 20)
        assert period.calendar_year == 2024
        assert period.calendar_month == 3

    def test_day_21_opens_next_fiscal_month(self):
        """2024-04-21 is the first day of fiscal month 5."""
        period = resolve_fiscal_month(date(2024, 4, 21))

        assert period.fiscal_month == 5
        assert period.start_date == date(2024, 4, 21)
        assert period.end_date == date(2024, 5, 20)

    def test_january_rolls_back_to_previous_year(self):
        """Fiscal month 1 starts on 21 December of the previous year."""
        period = resolve_fiscal_month(date(2024, 1, 15))

        assert period.fiscal_month == 1
        assert period.start_date == date(2023, 12, 21)
        assert period.end_date == date(2024, 1, 20)
        assert period.calendar_year == 2023
        assert period.calendar_month == 12

    def test_late_december_rolls_forward_to_next_year(self):
        """Late December belongs to fiscal month 1 of the next year."""
        period = resolve_fiscal_month(date(2024, 12, 25))

        assert period.fiscal_month == 1
        assert period.start_date == date(2024, 12, 21)
        assert period.end_date == date(2025, 1, 20)

    def test_time_of_day_is_ignored(self):
        """A datetime late in the evening resolves like its calendar day."""
        assert resolve_fiscal_month(datetime(2024, 4, 20, 23, 59)) == \
            resolve_fiscal_month(date(2024, 4, 20))

    def test_name(self):
        """Display name shows the fiscal label and both bounds."""
        period = resolve_fiscal_month(date(2024, 4, 25))
        assert period.name == "Tháng 5 Estron (21/04 - 20/05/2024)"

    @pytest.mark.parametrize("d", ALL_DAYS_2023_2025[::3])
    def test_bounds_for_every_day(self, d):
        """Start is always the 21st and end the 20th of the following month."""
        period = resolve_fiscal_month(d)

        assert period.start_date.day == 21
        assert period.end_date.day == 20
        assert period.start_date <= d <= period.end_date
        assert period.end_date.month == period.start_date.month % 12 + 1
        assert period.fiscal_month == period.end_date.month

        if d.day >= 21:
            assert period.start_date.month == d.month
            assert period.start_date.year == d.year
        else:
            assert period.end_date.month == d.month
            assert period.end_date.year == d.year


class TestPartitionIntoWeeks:
    """Tests for partition_into_weeks."""

    def test_sunday_start_gives_single_day_first_week(self):
        """Fiscal month 5 of 2024 starts on a Sunday."""
        weeks = partition_into_weeks(resolve_fiscal_month(date(2024, 4, 21)))

        assert weeks[0].week_index == 1
        assert weeks[0].start_date == date(2024, 4, 21)
        assert weeks[0].end_date == date(2024, 4, 21)
        assert weeks[0].days == (date(2024, 4, 21),)
        assert weeks[1].start_date == date(2024, 4, 22)
        assert weeks[1].end_date == date(2024, 4, 28)

    def test_last_week_cut_at_month_end(self):
        """2024-05-20 is a Monday, so the final week is a single day."""
        weeks = partition_into_weeks(resolve_fiscal_month(date(2024, 4, 21)))

        assert len(weeks) == 6
        assert weeks[-1].start_date == date(2024, 5, 20)
        assert weeks[-1].end_date == date(2024, 5, 20)

    def test_short_period_gives_one_week(self):
        """A period shorter than a week inside one Monday-start week stays whole."""
        period = FiscalMonthPeriod(
            calendar_year=2024, calendar_month=4, fiscal_month=5,
            start_date=date(2024, 4, 23), end_date=date(2024, 4, 25)
        )
        weeks = partition_into_weeks(period)

        assert len(weeks) == 1
        assert weeks[0].start_date == date(2024, 4, 23)
        assert weeks[0].end_date == date(2024, 4, 25)
        assert len(weeks[0].days) == 3

    def test_week_name(self):
        weeks = partition_into_weeks(resolve_fiscal_month(date(2024, 4, 21)))
        assert weeks[2].name == "Tuần 3"

    @pytest.mark.parametrize(
        "period",
        sorted(
            {resolve_fiscal_month(d) for d in ALL_DAYS_2023_2025},
            key=lambda p: p.start_date
        )
    )
    def test_partition_is_complete(self, period):
        """Weeks cover the month with no gap or overlap and end on Sundays."""
        weeks = partition_into_weeks(period)

        assert [w.week_index for w in weeks] == list(range(1, len(weeks) + 1))
        assert weeks[0].start_date == period.start_date
        assert weeks[-1].end_date == period.end_date

        for previous, following in zip(weeks, weeks[1:]):
            assert following.start_date == previous.end_date + timedelta(days=1)

        for week in weeks:
            assert week.start_date <= week.end_date
            assert week.end_date.weekday() == 6 or week.end_date == period.end_date
            assert list(week.days) == list(_all_days(week.start_date, week.end_date))
            assert len(week.days) <= 7

        covered = [d for w in weeks for d in w.days]
        assert covered == list(_all_days(period.start_date, period.end_date))


class TestGetVisibleWeeks:
    """Tests for get_visible_weeks."""

    def test_thursday_in_second_week(self):
        """2024-04-25 is in week 2 of fiscal month 5; weeks 1-2 are visible."""
        info = get_visible_weeks(date(2024, 4, 25))

        assert info.fiscal_month.fiscal_month == 5
        assert info.current_week.week_index == 2
        assert [w.week_index for w in info.visible_weeks] == [1, 2]
        assert len(info.all_weeks) == 6

    def test_first_day_of_month(self):
        """On the fiscal month start only week 1 is visible."""
        info = get_visible_weeks(date(2024, 4, 21))

        assert info.current_week.week_index == 1
        assert [w.week_index for w in info.visible_weeks] == [1]

    def test_last_day_of_month(self):
        """On the fiscal month end every week is visible."""
        info = get_visible_weeks(date(2024, 5, 20))

        assert info.current_week.week_index == len(info.all_weeks)
        assert info.visible_weeks == info.all_weeks

    @pytest.mark.parametrize("d", ALL_DAYS_2023_2025[::5])
    def test_visible_week_properties(self, d):
        """Current week contains the date and no visible week starts after it."""
        info = get_visible_weeks(d)

        assert info.current_week.contains(d)
        assert info.visible_weeks[-1] == info.current_week
        assert all(w.start_date <= d for w in info.visible_weeks)
        indexes = [w.week_index for w in info.visible_weeks]
        assert indexes == sorted(set(indexes))
        assert indexes == list(range(1, info.current_week.week_index + 1))

    def test_idempotent(self):
        """Repeated calls give structurally identical results."""
        assert get_visible_weeks(date(2024, 2, 29)) == get_visible_weeks(date(2024, 2, 29))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
