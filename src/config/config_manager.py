"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Provides explicit mapping between the settings dataclasses and JSON.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")


@dataclass
class Paths:
    """File paths configuration."""
    storage_file: str = "data/estron_storage.json"  # Relative to project root


@dataclass
class StatisticsSettings:
    """Conversion factors and display threshold for monthly statistics."""
    hours_per_workday: float = 8        # Giờ công chuẩn một ngày
    minutes_per_hour: float = 60
    progress_threshold: int = 80        # Dưới ngưỡng này hiển thị màu đỏ


@dataclass
class OutputSettings:
    """Output settings for the exported report."""
    output_dir: str = ""  # Default empty = project root
    filename_pattern: str = "Estron_T{month}_{year}.xlsx"


@dataclass
class UIPrefs:
    """Display preferences."""
    date_format: str = "%d/%m/%Y"
    short_date_format: str = "%d/%m"


@dataclass
class AppConfig:
    """Main application configuration container."""
    paths: Paths = field(default_factory=Paths)
    statistics: StatisticsSettings = field(default_factory=StatisticsSettings)
    output_settings: OutputSettings = field(default_factory=OutputSettings)
    ui_prefs: UIPrefs = field(default_factory=UIPrefs)


class ConfigManager:
    """
    Manages application configuration with JSON persistence.

    Responsibilities:
    - Load configuration from JSON file
    - Save configuration to JSON file
    - Provide default configuration
    - Convert between dataclass and dict representations
    """

    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.json"

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Không đọc được cấu hình {self.config_path}, dùng mặc định: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = self._config_to_dict(self._config)
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def update(self, **kwargs) -> None:
        """Update top-level configuration sections and save."""
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
        self.save()

    def resolve_path(self, raw: str) -> Path:
        """Resolve a configured path; relative paths are anchored at the project root."""
        path = Path(raw)
        return path if path.is_absolute() else self.PROJECT_ROOT / path

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "paths": {
                "storage_file": config.paths.storage_file
            },
            "statistics": {
                "hours_per_workday": config.statistics.hours_per_workday,
                "minutes_per_hour": config.statistics.minutes_per_hour,
                "progress_threshold": config.statistics.progress_threshold
            },
            "output_settings": {
                "output_dir": config.output_settings.output_dir,
                "filename_pattern": config.output_settings.filename_pattern
            },
            "ui_prefs": {
                "date_format": config.ui_prefs.date_format,
                "short_date_format": config.ui_prefs.short_date_format
            }
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        paths_data = data.get("paths", {})
        statistics_data = data.get("statistics", {})
        output_settings_data = data.get("output_settings", {})
        ui_prefs_data = data.get("ui_prefs", {})

        paths = Paths(
            storage_file=paths_data.get("storage_file", "data/estron_storage.json")
        )

        statistics = StatisticsSettings(
            hours_per_workday=float(statistics_data.get("hours_per_workday", 8)),
            minutes_per_hour=float(statistics_data.get("minutes_per_hour", 60)),
            progress_threshold=int(statistics_data.get("progress_threshold", 80))
        )

        output_settings = OutputSettings(
            output_dir=output_settings_data.get("output_dir", ""),
            filename_pattern=output_settings_data.get("filename_pattern", "Estron_T{month}_{year}.xlsx")
        )

        ui_prefs = UIPrefs(
            date_format=ui_prefs_data.get("date_format", "%d/%m/%Y"),
            short_date_format=ui_prefs_data.get("short_date_format", "%d/%m")
        )

        return AppConfig(
            paths=paths,
            statistics=statistics,
            output_settings=output_settings,
            ui_prefs=ui_prefs
        )
