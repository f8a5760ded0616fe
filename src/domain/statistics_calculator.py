"""
Statistics Calculator Module

Aggregates quotas, production entries and supplementary records into
work amounts and monthly statistics over fiscal periods.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional

from .date_utils import (
    format_date, get_day_of_week_vietnamese, normalize_date, to_iso_string
)
from .entities import (
    DailyProductionData, DailySupplementaryData, FiscalMonthPeriod,
    FiscalWeekPeriod, MonthlyStatistics, ProductionEntry, ProductionLine,
    ProgressTier, Quota, WeeklyProduction
)
from .fiscal_calendar import get_visible_weeks, resolve_fiscal_month
from .sorting import sort_production_entries
from .workday_calculator import count_standard_workdays

HOURS_PER_WORKDAY = 8
MINUTES_PER_HOUR = 60


def progress_percentage(value: float, max_value: float) -> float:
    """
    Progress of value against max_value as a percentage clamped to 0-100.

    With no positive maximum, any positive value counts as complete.
    """
    if max_value > 0:
        return min(100.0, max(0.0, (value / max_value) * 100))
    return 100.0 if value > 0 else 0.0


def _positive_total(values: Iterable[Optional[float]]) -> float:
    """Sum recorded, strictly positive values; absent ones are skipped."""
    return sum((v for v in values if v is not None and v > 0), 0.0)


class StatisticsCalculator:
    """
    Calculates production work amounts and monthly statistics.

    Provides:
    - Work amount per production entry (quantity / daily quota)
    - Daily and weekly production grouping for the visible weeks
    - Monthly totals, target work and attainment tier
    """

    def __init__(
        self,
        hours_per_workday: float = HOURS_PER_WORKDAY,
        minutes_per_hour: float = MINUTES_PER_HOUR,
        progress_threshold: int = 80
    ):
        """
        Initialize calculator.

        Args:
            hours_per_workday: Hours that make up one standard workday
            minutes_per_hour: Minutes per hour for meeting time conversion
            progress_threshold: Lower attainment threshold (default 80%)
        """
        self.hours_per_workday = hours_per_workday
        self.minutes_per_hour = minutes_per_hour
        self.progress_threshold = progress_threshold

    @staticmethod
    def index_quotas(quotas: List[Quota]) -> Dict[str, Quota]:
        return {q.stage_code: q for q in quotas}

    def calculate_work_amount(
        self,
        entry: ProductionEntry,
        quotas_by_stage: Dict[str, Quota]
    ) -> float:
        """
        Calculate the workdays represented by one production entry.

        Returns:
            quantity / daily_quota, or 0 when the stage has no usable quota
        """
        quota = quotas_by_stage.get(entry.stage_code)
        if quota is None or quota.daily_quota <= 0:
            return 0.0
        return entry.quantity / quota.daily_quota

    def calculate_total_work_done(
        self,
        entries: List[ProductionEntry],
        quotas: List[Quota]
    ) -> float:
        quotas_by_stage = self.index_quotas(quotas)
        return sum(self.calculate_work_amount(e, quotas_by_stage) for e in entries)

    def get_progress_tier(self, percentage: float) -> ProgressTier:
        """
        Get color tier for an attainment percentage.

        Args:
            percentage: Attainment percentage (0-100)

        Returns:
            ProgressTier enum value
        """
        if percentage < self.progress_threshold:
            return ProgressTier.RED
        elif percentage < 100:
            return ProgressTier.YELLOW
        else:
            return ProgressTier.GREEN

    def build_daily_production(
        self,
        week: FiscalWeekPeriod,
        entries: List[ProductionEntry],
        quotas: List[Quota],
        today: Optional[date] = None
    ) -> List[DailyProductionData]:
        """
        Group production entries into one card per day of a week.

        Days without entries still get an empty card. When today is given,
        days after it are left out.
        """
        return [card for card, _ in self._daily_cards(week, entries, quotas, today)]

    def _daily_cards(self, week, entries, quotas, today=None):
        """Yield (card, unrounded day total) for each shown day of a week."""
        quotas_by_stage = self.index_quotas(quotas)
        by_date: Dict[str, List[ProductionEntry]] = {}
        for entry in sort_production_entries(entries, quotas):
            by_date.setdefault(entry.date, []).append(entry)

        last_day = normalize_date(today) if today is not None else None
        for day in week.days:
            if last_day is not None and day > last_day:
                continue
            iso = to_iso_string(day)
            lines = []
            total = 0.0
            for entry in by_date.get(iso, []):
                amount = self.calculate_work_amount(entry, quotas_by_stage)
                total += amount
                lines.append(ProductionLine(
                    entry_id=entry.id,
                    stage_code=entry.stage_code,
                    quantity=entry.quantity,
                    work_amount=round(amount, 2),
                ))
            card = DailyProductionData(
                date=iso,
                day_of_week=get_day_of_week_vietnamese(day),
                formatted_date=format_date(day, '%d/%m'),
                entries=lines,
                total_work_for_day=round(total, 2),
            )
            yield card, total

    def build_weekly_production(
        self,
        today: date,
        entries: List[ProductionEntry],
        quotas: List[Quota]
    ) -> List[WeeklyProduction]:
        """
        Daily cards for every visible week of today's fiscal month.

        Only days up to today are listed. The weekly total sums the
        unrounded day totals and is rounded once.
        """
        info = get_visible_weeks(today)
        weekly = []
        for week in info.visible_weeks:
            cards = list(self._daily_cards(week, entries, quotas, today))
            weekly.append(WeeklyProduction(
                week=week,
                days=[card for card, _ in cards],
                total_weekly_work=round(sum((total for _, total in cards), 0.0), 2),
            ))
        return weekly

    def calculate_monthly_statistics(
        self,
        today: date,
        quotas: List[Quota],
        entries: List[ProductionEntry],
        supplementary: List[DailySupplementaryData]
    ) -> MonthlyStatistics:
        """
        Calculate the fiscal month statistics as of a reference date.

        Records outside the fiscal month of today are ignored. Figures are
        rounded to 2 decimals only after every total is computed.

        Args:
            today: Reference date, supplied by the caller
            quotas: All quotas
            entries: Production entries (any range)
            supplementary: Supplementary records (any range)

        Returns:
            MonthlyStatistics for the fiscal month containing today
        """
        today = normalize_date(today)
        period = resolve_fiscal_month(today)
        capped_today = min(today, period.end_date)

        workdays_for_month = count_standard_workdays(period.start_date, period.end_date)
        workdays_to_date = count_standard_workdays(period.start_date, capped_today)

        month_entries = [e for e in entries if self._in_period(e.date, period)]
        month_supplementary = [s for s in supplementary if self._in_period(s.date, period)]

        work_done = self.calculate_total_work_done(month_entries, quotas)
        overtime_hours = _positive_total(s.overtime_hours for s in month_supplementary)
        leave_hours = _positive_total(s.leave_hours for s in month_supplementary)
        meeting_minutes = _positive_total(s.meeting_minutes for s in month_supplementary)

        leave_days = leave_hours / self.hours_per_workday
        meeting_hours = meeting_minutes / self.minutes_per_hour

        target = (
            float(workdays_to_date)
            + overtime_hours / self.hours_per_workday
            - leave_days
            - meeting_hours / self.hours_per_workday
        )
        target = max(0.0, target)

        attainment = progress_percentage(work_done, target)

        return MonthlyStatistics(
            fiscal_month=period,
            standard_workdays_for_month=workdays_for_month,
            standard_workdays_to_date=workdays_to_date,
            total_product_work_done=round(work_done, 2),
            target_product_work=round(target, 2),
            total_overtime_hours=round(overtime_hours, 2),
            total_leave_days=round(leave_days, 2),
            total_meeting_hours=round(meeting_hours, 2),
            attainment_percentage=round(attainment, 2),
            progress_tier=self.get_progress_tier(attainment),
        )

    @staticmethod
    def _in_period(iso_date: str, period: FiscalMonthPeriod) -> bool:
        return to_iso_string(period.start_date) <= iso_date <= to_iso_string(period.end_date)
