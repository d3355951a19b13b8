"""
In-memory Storage

Volatile implementation of KeyValueStorage. Used by the tests and as the
backend when no data file is wanted.
"""

from typing import Optional

from pocket_ledger.services.storage.interface import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dictionary-backed key-value storage."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def exists(self, key: str) -> bool:
        return key in self._data

    def snapshot(self) -> dict[str, str]:
        """Copy of everything stored, for inspection in tests."""
        return dict(self._data)
