"""
Storage Services Package

Provides the abstract key-value interface and concrete implementations.
JSON files are the durable backend; the in-memory backend serves tests.
"""

from fincontrol.services.storage.interface import (
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from fincontrol.services.storage.file import JsonFileStorage
from fincontrol.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
