"""
Sorting Utilities Module

Provides ordering functions for quotas and production entries.
All functions return new lists and never reorder their input.
"""

from dataclasses import replace
from typing import Dict, List

from .entities import ProductionEntry, Quota


def sort_quotas(quotas: List[Quota]) -> List[Quota]:
    """Sort quotas by display order."""
    return sorted(quotas, key=lambda q: q.order)


def renumber_quotas(quotas: List[Quota]) -> List[Quota]:
    """
    Assign order values from list position.

    Returns:
        New Quota objects whose order equals their index
    """
    return [replace(q, order=index) for index, q in enumerate(quotas)]


def get_stage_order(quotas: List[Quota]) -> Dict[str, int]:
    """Map stage code to its quota display order."""
    return {q.stage_code: q.order for q in quotas}


def sort_production_entries(
    entries: List[ProductionEntry],
    quotas: List[Quota]
) -> List[ProductionEntry]:
    """
    Sort entries by date, then by their quota's display order.

    Entries whose stage has no quota go last within their day, by stage code.
    """
    stage_order = get_stage_order(quotas)
    unknown = len(stage_order)
    return sorted(
        entries,
        key=lambda e: (e.date, stage_order.get(e.stage_code, unknown), e.stage_code)
    )
