"""Services package."""

from fincontrol.services.data_store import (
    DataStore,
    DataStoreError,
    ReferentialIntegrityError,
    SnapshotFormatError,
    parse_snapshot,
)
from fincontrol.services.defaults import default_categories, seed_dataset
from fincontrol.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # Data store
    "DataStore",
    "DataStoreError",
    "ReferentialIntegrityError",
    "SnapshotFormatError",
    "parse_snapshot",
    # Seed data
    "default_categories",
    "seed_dataset",
    # Storage services
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
