"""
Quota Rules Module

Normalisation and validation of quota input before it reaches storage.
"""

import re
from typing import Dict, Iterable, Optional, Union

from .entities import Quota

# Keep digits and a decimal point, as typed into the quota field
NUMBER_CLEAN_PATTERN = re.compile(r'[^0-9.]')


def normalize_stage_code(stage_code: str) -> str:
    """Stage codes are entered upper-case and trimmed."""
    return (stage_code or "").strip().upper()


def stage_code_key(stage_code: str) -> str:
    """Comparison key: stage codes are unique ignoring case and whitespace."""
    return (stage_code or "").strip().lower()


def is_duplicate_stage_code(
    stage_code: str,
    quotas: Iterable[Quota],
    exclude_id: Optional[str] = None
) -> bool:
    """
    Check whether another quota already uses this stage code.

    Args:
        stage_code: Candidate stage code
        quotas: Existing quotas
        exclude_id: Quota id to ignore (the quota being edited)
    """
    key = stage_code_key(stage_code)
    return any(
        q.id != exclude_id and stage_code_key(q.stage_code) == key
        for q in quotas
    )


def parse_daily_quota(raw: Union[str, float, int, None]) -> Optional[float]:
    """Parse a daily quota typed as text, returning None when unusable."""
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    cleaned = NUMBER_CLEAN_PATTERN.sub('', raw)
    try:
        return float(cleaned)
    except ValueError:
        return None


def validate_quota_input(
    stage_code: str,
    daily_quota: Union[str, float, int, None]
) -> Dict[str, str]:
    """
    Validate quota form input.

    Returns:
        Mapping of field name to error message; empty when input is valid
    """
    errors: Dict[str, str] = {}
    if not normalize_stage_code(stage_code):
        errors["stage_code"] = "Mã công đoạn không được để trống."

    value = parse_daily_quota(daily_quota)
    if value is None or value <= 0:
        errors["daily_quota"] = "Định mức ngày phải là một số dương."
    return errors
