"""
Production Storage Module

Persists quotas, production entries and daily supplementary data as JSON
lists under fixed logical keys of a key-value store. Every operation loads
the list, builds a new one and saves it back.
"""

import json
import uuid
from dataclasses import asdict, replace
from enum import Enum
from typing import List, Optional, Union

from domain.entities import DailySupplementaryData, ProductionEntry, Quota
from domain.errors import DuplicateStageCodeError, RecordNotFoundError
from domain.quota_rules import is_duplicate_stage_code, normalize_stage_code
from domain.sorting import renumber_quotas, sort_quotas
from domain.supplementary_rules import apply_full_day_leave, is_full_day_leave
from infrastructure.kv_store import JsonKeyValueStore
from infrastructure.logger import get_logger

logger = get_logger("ProductionStorage")

QUOTAS_KEY = 'ESTRON_APP_QUOTAS_V1'
PRODUCTION_ENTRIES_KEY = 'ESTRON_APP_PRODUCTION_ENTRIES_V1'
SUPPLEMENTARY_DATA_KEY = 'ESTRON_APP_SUPPLEMENTARY_DATA_V1'


class _Unset(Enum):
    UNSET = "UNSET"


# Marks a supplementary field the caller did not supply (keep stored value)
UNSET = _Unset.UNSET

OptionalField = Union[Optional[float], _Unset]


class ProductionStorage:
    """
    Repository for the production tracking records.

    Quota stage codes are unique ignoring case and surrounding whitespace.
    Production entries are unique per (date, stage_code); supplementary
    records are unique per date.
    """

    def __init__(self, store: JsonKeyValueStore):
        self.store = store

    def _load_list(self, key: str, label: str) -> List[dict]:
        raw = self.store.get(key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Lỗi khi tải {label}: {e}")
            return []
        if not isinstance(data, list):
            logger.error(f"Lỗi khi tải {label}: dữ liệu không phải danh sách")
            return []
        return data

    def _save_list(self, key: str, items: list) -> None:
        self.store.set(key, json.dumps([asdict(item) for item in items], ensure_ascii=False))

    # ------------------------------------------------------------------
    # Quotas (Định mức)
    # ------------------------------------------------------------------
    def get_quotas(self) -> List[Quota]:
        quotas = [
            Quota(
                id=row["id"],
                stage_code=row["stage_code"],
                daily_quota=float(row["daily_quota"]),
                order=int(row.get("order", 0)),
            )
            for row in self._load_list(QUOTAS_KEY, "định mức")
        ]
        return sort_quotas(quotas)

    def save_quotas(self, quotas: List[Quota]) -> List[Quota]:
        """Save quotas in list order, renumbering their order field."""
        ordered = renumber_quotas(quotas)
        self._save_list(QUOTAS_KEY, ordered)
        return ordered

    def add_quota(self, stage_code: str, daily_quota: float) -> Quota:
        """
        Append a new quota.

        Raises:
            DuplicateStageCodeError: If the stage code is already used
        """
        quotas = self.get_quotas()
        if is_duplicate_stage_code(stage_code, quotas):
            logger.warning(f"Mã công đoạn '{stage_code}' đã tồn tại.")
            raise DuplicateStageCodeError(stage_code)

        new_quota = Quota(
            id=str(uuid.uuid4()),
            stage_code=normalize_stage_code(stage_code),
            daily_quota=float(daily_quota),
            order=len(quotas),
        )
        self.save_quotas(quotas + [new_quota])
        logger.info(f"Đã thêm định mức {new_quota.stage_code}: {new_quota.daily_quota}")
        return new_quota

    def update_quota(self, updated: Quota) -> Quota:
        """
        Replace a stored quota by id, keeping its position.

        Raises:
            RecordNotFoundError: If no quota has this id
            DuplicateStageCodeError: If another quota uses the stage code
        """
        quotas = self.get_quotas()
        index = next((i for i, q in enumerate(quotas) if q.id == updated.id), -1)
        if index == -1:
            logger.warning(f"Không tìm thấy định mức với ID: {updated.id} để cập nhật.")
            raise RecordNotFoundError(updated.id)
        if is_duplicate_stage_code(updated.stage_code, quotas, exclude_id=updated.id):
            logger.warning(f"Mã công đoạn '{updated.stage_code}' đã tồn tại cho một định mức khác.")
            raise DuplicateStageCodeError(updated.stage_code)

        new_quotas = list(quotas)
        new_quotas[index] = replace(updated, stage_code=normalize_stage_code(updated.stage_code))
        return self.save_quotas(new_quotas)[index]

    def delete_quota(self, quota_id: str) -> None:
        quotas = self.get_quotas()
        self.save_quotas([q for q in quotas if q.id != quota_id])

    # ------------------------------------------------------------------
    # Production entries (Sản lượng)
    # ------------------------------------------------------------------
    def get_production_entries(self) -> List[ProductionEntry]:
        return [
            ProductionEntry(
                id=row["id"],
                date=row["date"],
                stage_code=row["stage_code"],
                quantity=float(row["quantity"]),
            )
            for row in self._load_list(PRODUCTION_ENTRIES_KEY, "dữ liệu sản lượng")
        ]

    def add_or_update_production_entry(
        self,
        date: str,
        stage_code: str,
        quantity: float
    ) -> ProductionEntry:
        """
        Record the quantity for a stage on a day, replacing any earlier value.

        Args:
            date: ISO date string (YYYY-MM-DD)
            stage_code: Stage code of the quota
            quantity: Units produced

        Returns:
            The stored entry (existing id kept on update)
        """
        entries = self.get_production_entries()
        existing = next(
            (e for e in entries if e.date == date and e.stage_code == stage_code), None
        )
        if existing is not None:
            result = replace(existing, quantity=float(quantity))
            new_entries = [result if e.id == existing.id else e for e in entries]
        else:
            result = ProductionEntry(
                id=str(uuid.uuid4()),
                date=date,
                stage_code=stage_code,
                quantity=float(quantity),
            )
            new_entries = entries + [result]

        self._save_list(PRODUCTION_ENTRIES_KEY, new_entries)
        logger.debug(f"Đã lưu sản lượng {date} {stage_code}: {quantity}")
        return result

    def get_production_entries_by_date(self, date: str) -> List[ProductionEntry]:
        return [e for e in self.get_production_entries() if e.date == date]

    def get_production_entries_by_date_range(
        self,
        start_date: str,
        end_date: str
    ) -> List[ProductionEntry]:
        """Entries with start_date <= date <= end_date (ISO strings)."""
        return [
            e for e in self.get_production_entries()
            if start_date <= e.date <= end_date
        ]

    def delete_production_entry(self, entry_id: str) -> None:
        entries = self.get_production_entries()
        self._save_list(PRODUCTION_ENTRIES_KEY, [e for e in entries if e.id != entry_id])

    # ------------------------------------------------------------------
    # Supplementary data (Nghỉ, Tăng ca, Họp)
    # ------------------------------------------------------------------
    def get_all_supplementary_data(self) -> List[DailySupplementaryData]:
        return [
            DailySupplementaryData(
                date=row["date"],
                leave_hours=row.get("leave_hours"),
                overtime_hours=row.get("overtime_hours"),
                meeting_minutes=row.get("meeting_minutes"),
            )
            for row in self._load_list(SUPPLEMENTARY_DATA_KEY, "dữ liệu phụ trợ")
        ]

    def add_or_update_supplementary_data(
        self,
        date: str,
        leave_hours: OptionalField = UNSET,
        overtime_hours: OptionalField = UNSET,
        meeting_minutes: OptionalField = UNSET
    ) -> Optional[DailySupplementaryData]:
        """
        Add or update the supplementary record of a day.

        Fields left UNSET keep their stored value; fields passed as None are
        cleared. A record left with no value at all is removed. On a day of
        full leave (8 hours) overtime and meeting time are cleared, and
        updates to them are ignored.

        Returns:
            The stored record, or None if it ended up empty and was removed
        """
        all_data = self.get_all_supplementary_data()
        existing = next((s for s in all_data if s.date == date), None)
        base = existing or DailySupplementaryData(date=date)

        changes = {
            name: value
            for name, value in (
                ("leave_hours", leave_hours),
                ("overtime_hours", overtime_hours),
                ("meeting_minutes", meeting_minutes),
            )
            if value is not UNSET
        }
        record = replace(base, **changes)

        if is_full_day_leave(record.leave_hours):
            ignored = [
                name for name in ("overtime_hours", "meeting_minutes")
                if changes.get(name) is not None
            ]
            if ignored:
                logger.warning(f"Ngày {date} nghỉ cả ngày, bỏ qua: {', '.join(ignored)}")
            record = apply_full_day_leave(record)

        if existing is not None:
            new_data = [record if s.date == date else s for s in all_data]
        else:
            new_data = all_data + [record]
        new_data = [s for s in new_data if not s.is_empty]

        self._save_list(SUPPLEMENTARY_DATA_KEY, new_data)
        return None if record.is_empty else record

    def get_supplementary_data_by_date(self, date: str) -> Optional[DailySupplementaryData]:
        return next((s for s in self.get_all_supplementary_data() if s.date == date), None)

    def get_supplementary_data_by_date_range(
        self,
        start_date: str,
        end_date: str
    ) -> List[DailySupplementaryData]:
        return [
            s for s in self.get_all_supplementary_data()
            if start_date <= s.date <= end_date
        ]

    def clear_all_data(self) -> None:
        """Remove every stored record."""
        for key in (QUOTAS_KEY, PRODUCTION_ENTRIES_KEY, SUPPLEMENTARY_DATA_KEY):
            self.store.delete(key)
        logger.info("Đã xóa toàn bộ dữ liệu.")
