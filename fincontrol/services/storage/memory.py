"""
In-Memory Storage Implementation

Keeps blobs in a plain dict. Used by tests and by sessions that do not
need anything to survive the process.
"""

from typing import Optional

from fincontrol.services.storage.interface import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dict-backed key-value storage."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
