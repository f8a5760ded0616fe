"""
Statistics Service Module

Application layer service that loads stored records, computes fiscal
period statistics and exports the production report.
The reference date is always passed in by the caller.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional

from config.config_manager import AppConfig, ConfigManager, StatisticsSettings
from domain.date_utils import to_iso_string
from domain.entities import MonthlyStatistics, WeeklyProduction
from domain.fiscal_calendar import resolve_fiscal_month
from domain.statistics_calculator import StatisticsCalculator
from infrastructure.kv_store import JsonKeyValueStore
from infrastructure.logger import get_logger
from infrastructure.storage import ProductionStorage

logger = get_logger("StatisticsService")


@dataclass
class ReportResult:
    """Result of a report export."""
    output_path: Path
    statistics: MonthlyStatistics
    week_count: int = 0


class ProductionStatisticsService:
    """
    Application service for production statistics.

    This service:
    - Reads quotas, production entries and supplementary data from storage
    - Delegates all period and aggregate math to the domain layer
    - Writes the Excel report
    """

    def __init__(
        self,
        storage: ProductionStorage,
        settings: Optional[StatisticsSettings] = None,
        short_date_format: str = "%d/%m"
    ):
        self.storage = storage
        self.settings = settings or StatisticsSettings()
        self.short_date_format = short_date_format
        self.calculator = StatisticsCalculator(
            hours_per_workday=self.settings.hours_per_workday,
            minutes_per_hour=self.settings.minutes_per_hour,
            progress_threshold=self.settings.progress_threshold,
        )

    def get_monthly_statistics(self, today: date) -> MonthlyStatistics:
        """Statistics of the fiscal month containing today."""
        period = resolve_fiscal_month(today)
        start_str = to_iso_string(period.start_date)
        end_str = to_iso_string(period.end_date)

        quotas = self.storage.get_quotas()
        entries = self.storage.get_production_entries_by_date_range(start_str, end_str)
        supplementary = self.storage.get_supplementary_data_by_date_range(start_str, end_str)

        logger.debug(
            f"{period.name}: {len(quotas)} định mức, {len(entries)} sản lượng, "
            f"{len(supplementary)} dữ liệu phụ trợ"
        )
        return self.calculator.calculate_monthly_statistics(today, quotas, entries, supplementary)

    def get_weekly_production(self, today: date) -> List[WeeklyProduction]:
        """Daily production cards for the visible weeks of today's fiscal month."""
        period = resolve_fiscal_month(today)
        entries = self.storage.get_production_entries_by_date_range(
            to_iso_string(period.start_date), to_iso_string(period.end_date)
        )
        return self.calculator.build_weekly_production(today, entries, self.storage.get_quotas())

    def export_report(self, today: date, output_path: Path) -> ReportResult:
        """
        Export the statistics and weekly production of today's fiscal month.

        Raises:
            OSError: If the workbook cannot be written
        """
        from infrastructure.excel_writer import ProductionReportWriter

        statistics = self.get_monthly_statistics(today)
        weekly = self.get_weekly_production(today)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Bắt đầu ghi Excel: {output_path}")
        writer = ProductionReportWriter(short_date_format=self.short_date_format)
        writer.create_report(statistics, weekly, output_path)
        logger.info("Ghi Excel hoàn tất")

        return ReportResult(output_path=output_path, statistics=statistics, week_count=len(weekly))

    @staticmethod
    def build_from_config(
        config: AppConfig,
        config_manager: Optional[ConfigManager] = None
    ) -> "ProductionStatisticsService":
        """
        Wire storage and settings from AppConfig.

        Args:
            config: Application configuration
            config_manager: Used to resolve relative paths; defaults to a
                fresh ConfigManager

        Returns:
            ProductionStatisticsService ready to use
        """
        manager = config_manager or ConfigManager()
        store = JsonKeyValueStore(manager.resolve_path(config.paths.storage_file))
        return ProductionStatisticsService(
            storage=ProductionStorage(store),
            settings=config.statistics,
            short_date_format=config.ui_prefs.short_date_format,
        )
