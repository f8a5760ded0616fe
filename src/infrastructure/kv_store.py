"""
Key-Value Store Module

A flat string key-value store persisted as a single JSON object file.
Every write replaces the whole file atomically; the last write wins.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from infrastructure.logger import get_logger

logger = get_logger("KeyValueStore")


class JsonKeyValueStore:
    """
    Stores string values under logical keys in a JSON file.

    A missing file reads as an empty store. The parent directory is
    created on the first write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            text = f.read()
        if not text.strip():
            return {}
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        # Temp file in the same directory, then swapped in
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug(f"Đã ghi khóa {key} ({len(value)} ký tự)")

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
            logger.debug(f"Đã xóa khóa {key}")

    def clear(self) -> None:
        self._write_all({})
