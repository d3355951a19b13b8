"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Use a JSON file on disk in the application
2. Use in-memory storage for testing
3. Swap in any other durable key-value backend later

The interface is intentionally tiny: a durable string store keyed by name.
Serialization of records is the store's job, not the backend's.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for a durable string store.

    Writes replace the whole value for a key (last write wins).
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key was never written

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a key has ever been written."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not open the storage backend."""
    pass
