"""
JSON File Storage Implementation

All keys live in a single JSON object on disk: {"SavedExpenses": "...", ...}.

TRADEOFFS:
- Every write rewrites the whole file (fine for a few hundred KB)
- No concurrent writers; a single process owns the file
- Writes go to a temporary file first and are moved into place, so a
  crash mid-write leaves the previous version intact
"""

import json
import os
from pathlib import Path
from typing import Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from pocket_ledger.log import get_logger
from pocket_ledger.services.storage.interface import (
    ConnectionError,
    KeyValueStorage,
    StorageError,
)


logger = get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """
    File-backed key-value storage.

    The file is read once, lazily, and kept in memory; writes update the
    cache and then flush the whole object to disk.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._data: Optional[dict[str, str]] = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        """Read the file on first access."""
        if self._data is None:
            if not self._path.exists():
                self._data = {}
            else:
                try:
                    raw = json.loads(self._path.read_text(encoding="utf-8"))
                except (OSError, UnicodeDecodeError) as e:
                    raise ConnectionError(f"Cannot read store file {self._path}: {e}")
                except json.JSONDecodeError as e:
                    raise StorageError(f"Store file {self._path} is not valid JSON: {e}")
                if not isinstance(raw, dict):
                    raise StorageError(f"Store file {self._path} must contain a JSON object")
                self._data = {str(k): str(v) for k, v in raw.items()}
        return self._data

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _flush(self, data: dict[str, str]) -> None:
        """Write the whole object atomically (temp file + replace)."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = dict(self._load())
        data[key] = value
        try:
            self._flush(data)
        except OSError as e:
            logger.error("store_file_write_failed", path=str(self._path), key=key, error=str(e))
            raise StorageError(f"Failed to write {key} to {self._path}: {e}")
        self._data = data

    def exists(self, key: str) -> bool:
        return key in self._load()
