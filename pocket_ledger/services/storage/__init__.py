"""
Storage Services Package

Provides the abstract key-value interface and its implementations:
a JSON file on disk and an in-memory dictionary.
"""

from pocket_ledger.services.storage.interface import (
    ConnectionError,
    KeyValueStorage,
    StorageError,
)
from pocket_ledger.services.storage.json_file import JsonFileStorage
from pocket_ledger.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "ConnectionError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
