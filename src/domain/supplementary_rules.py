"""
Supplementary Rules Module

Rules applied to a day's supplementary record before it is stored.
"""

from dataclasses import replace
from typing import Optional

from .entities import DailySupplementaryData

# Leave hours that mark the whole day as taken off
FULL_DAY_LEAVE_HOURS = 8


def is_full_day_leave(leave_hours: Optional[float]) -> bool:
    return leave_hours is not None and leave_hours == FULL_DAY_LEAVE_HOURS


def apply_full_day_leave(record: DailySupplementaryData) -> DailySupplementaryData:
    """
    A full day of leave leaves no room for overtime or meetings.

    Returns the record with overtime and meeting time cleared when its
    leave is a full day, otherwise the record unchanged.
    """
    if not is_full_day_leave(record.leave_hours):
        return record
    return replace(record, overtime_hours=None, meeting_minutes=None)
