"""
Logger Module

Centralized logging for the storage, service and report layers.
Console output at INFO (or ESTRON_LOG_LEVEL), full DEBUG trace in the log file.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

_LOG_FILE_NAME = "estron_tracker.log"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _get_project_root() -> Path:
    return Path(__file__).parent.parent.parent


def _default_log_path() -> Path:
    env_path = os.getenv("ESTRON_LOG_FILE", "")
    return Path(env_path) if env_path else _get_project_root() / _LOG_FILE_NAME


def _console_level() -> int:
    level_name = os.getenv("ESTRON_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger with console and file handlers.

    Args:
        name: Component name (e.g. "ProductionStorage")
        log_file: Optional log file path; defaults to ESTRON_LOG_FILE or
            estron_tracker.log at the project root

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Handlers are attached once per logger name
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(_console_level())
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_path = Path(log_file) if log_file else _default_log_path()
    try:
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"Không thể tạo file log {log_path}: {e}")

    return logger
