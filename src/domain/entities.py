"""
Domain Entities Module

Core domain entities using dataclasses for the production tracking system.
Calendar periods are immutable value objects recomputed on every call;
quota and production records mirror what the storage layer persists.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum, auto
from typing import List, Optional, Tuple


class DayClass(Enum):
    """Weekday classification used for standard workday weighting."""
    WEEKDAY = auto()   # Thứ 2 - Thứ 6
    SATURDAY = auto()  # Thứ 7
    SUNDAY = auto()    # Chủ Nhật


class ProgressTier(Enum):
    """Color tier for quota attainment display."""
    RED = auto()     # < threshold (default 80%)
    YELLOW = auto()  # >= threshold and < 100%
    GREEN = auto()   # >= 100%


@dataclass(frozen=True)
class FiscalMonthPeriod:
    """
    An Estron fiscal month: the 21st of one Gregorian month through the
    20th of the next.

    Attributes:
        calendar_year: Gregorian year in which the period starts
        calendar_month: Gregorian month in which the period starts (1-12)
        fiscal_month: Label of the fiscal month (1-12)
        start_date: First day of the period (inclusive, always day 21)
        end_date: Last day of the period (inclusive, always day 20)
    """
    calendar_year: int
    calendar_month: int
    fiscal_month: int
    start_date: date
    end_date: date

    @property
    def name(self) -> str:
        """Display name, e.g. 'Tháng 5 Estron (21/04 - 20/05/2024)'."""
        return (
            f"Tháng {self.fiscal_month} Estron "
            f"({self.start_date.strftime('%d/%m')} - {self.end_date.strftime('%d/%m/%Y')})"
        )

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class FiscalWeekPeriod:
    """
    One week of a fiscal month.

    Attributes:
        week_index: 1-based sequence number within the fiscal month
        start_date: First day of the week (inclusive)
        end_date: Last day of the week (inclusive), a Sunday or the month end
        days: Every calendar day from start_date to end_date
    """
    week_index: int
    start_date: date
    end_date: date
    days: Tuple[date, ...] = ()

    @property
    def name(self) -> str:
        return f"Tuần {self.week_index}"

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class VisibleWeeks:
    """
    Weeks of the fiscal month shown for a reference date.

    Attributes:
        fiscal_month: The fiscal month enclosing the reference date
        current_week: The week containing the reference date
        all_weeks: Every week of the fiscal month
        visible_weeks: Weeks from month start through current_week
    """
    fiscal_month: FiscalMonthPeriod
    current_week: FiscalWeekPeriod
    all_weeks: Tuple[FiscalWeekPeriod, ...]
    visible_weeks: Tuple[FiscalWeekPeriod, ...]


@dataclass
class Quota:
    """
    Daily output quota for a production stage.

    Attributes:
        id: Unique identifier (uuid4 string)
        stage_code: Stage code entered by the user, unique ignoring case
        daily_quota: Expected output for one full workday
        order: Display position
    """
    id: str
    stage_code: str
    daily_quota: float
    order: int = 0


@dataclass
class ProductionEntry:
    """
    Output recorded for one stage on one day.

    Attributes:
        id: Unique identifier (uuid4 string)
        date: ISO date string (YYYY-MM-DD); (date, stage_code) is unique
        stage_code: Stage code referencing Quota.stage_code
        quantity: Units produced
    """
    id: str
    date: str
    stage_code: str
    quantity: float


@dataclass
class DailySupplementaryData:
    """
    Leave, overtime and meeting time recorded for one day.

    A field left as None means "not recorded" and is skipped by every
    aggregate; it is never read as zero.
    """
    date: str
    leave_hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    meeting_minutes: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.leave_hours is None
            and self.overtime_hours is None
            and self.meeting_minutes is None
        )


@dataclass
class ProductionLine:
    """A production entry with its computed work amount, for display."""
    entry_id: str
    stage_code: str
    quantity: float
    work_amount: float = 0.0


@dataclass
class DailyProductionData:
    """
    Production entries of one day grouped for a daily card.

    Attributes:
        date: ISO date string
        day_of_week: Vietnamese weekday label (e.g. 'Thứ 2')
        formatted_date: Short display date (dd/MM)
        entries: Production lines of the day
        total_work_for_day: Sum of work amounts, rounded to 2 decimals
    """
    date: str
    day_of_week: str
    formatted_date: str
    entries: List[ProductionLine] = field(default_factory=list)
    total_work_for_day: float = 0.0


@dataclass
class WeeklyProduction:
    """A visible fiscal week paired with its daily cards and summed work."""
    week: FiscalWeekPeriod
    days: List[DailyProductionData] = field(default_factory=list)
    total_weekly_work: float = 0.0

    @property
    def has_data(self) -> bool:
        return any(day.entries for day in self.days)


@dataclass
class MonthlyStatistics:
    """
    Aggregated figures for one fiscal month as of a reference date.

    Attributes:
        fiscal_month: The fiscal month the figures cover
        standard_workdays_for_month: Weighted workdays over the whole month
        standard_workdays_to_date: Weighted workdays up to the reference date
        total_product_work_done: Work amounts summed over the month
        target_product_work: Expected work to date after supplementary time
        total_overtime_hours: Recorded overtime
        total_leave_days: Recorded leave, in workdays
        total_meeting_hours: Recorded meeting/training time, in hours
        attainment_percentage: Work done against target (0-100)
        progress_tier: Color tier of the attainment
    """
    fiscal_month: FiscalMonthPeriod
    standard_workdays_for_month: Decimal = Decimal(0)
    standard_workdays_to_date: Decimal = Decimal(0)
    total_product_work_done: float = 0.0
    target_product_work: float = 0.0
    total_overtime_hours: float = 0.0
    total_leave_days: float = 0.0
    total_meeting_hours: float = 0.0
    attainment_percentage: float = 0.0
    progress_tier: ProgressTier = ProgressTier.RED
