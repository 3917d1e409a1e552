"""
Abstract Storage Interface

DESIGN DECISION: The data store never touches a persistence medium
directly. It talks to this key-value port instead.
This allows us to:
1. Keep the dataset on disk for normal use
2. Use in-memory storage for testing
3. Swap in another medium later without touching business logic

The interface is intentionally tiny: one text blob per key, read and
rewritten wholesale. There is no partial update and no append.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for blob storage.

    Any storage implementation (files, memory, a browser-like local
    store) must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if nothing is stored

        Raises:
            StorageError: If the medium cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the blob stored under a key.

        Args:
            key: Storage key
            value: Full text to store

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """
        Delete the blob stored under a key.

        Args:
            key: Storage key

        Returns:
            True if something was removed, False if the key was absent
        """
        pass

    def contains(self, key: str) -> bool:
        """Check whether anything is stored under a key."""
        return self.get(key) is not None


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The storage medium could not be read."""
    pass


class StorageWriteError(StorageError):
    """The storage medium could not be written."""
    pass
