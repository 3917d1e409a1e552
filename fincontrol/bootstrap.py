"""
Application Bootstrap

Builds the pieces a front end needs, in a fixed order:
1. Logging (from AppSettings)
2. Storage backend (from StorageSettings)
3. Data store, seeded with the default categories when empty

DESIGN DECISION: Seeding is an explicit step here rather than a side
effect of the first read, so start-up order is deterministic.
"""

from dataclasses import dataclass
from typing import Optional

from fincontrol.audit import configure_logging, get_logger
from fincontrol.config import Settings, StorageSettings, get_settings
from fincontrol.services.data_store import DataStore
from fincontrol.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
)


@dataclass
class AppComponents:
    """Everything the presentation layer is allowed to depend on."""

    store: DataStore
    storage: KeyValueStorage


def create_storage(settings: StorageSettings) -> KeyValueStorage:
    """Storage backend selected by settings."""
    if settings.backend == "memory":
        return InMemoryStorage()
    return JsonFileStorage(
        settings.data_dir,
        write_attempts=settings.write_attempts,
    )


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use. Defaults to the cached global settings.
        storage: Backend override (tests, embedding). When given, the
                 backend named in settings is ignored.

    Returns:
        AppComponents with a ready-to-use data store
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings)
    logger = get_logger(__name__)

    storage = storage or create_storage(storage_settings)
    store = DataStore(storage, key=storage_settings.key)

    if app_settings.seed_on_startup:
        store.initialize()

    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        backend=type(storage).__name__,
        storage_key=storage_settings.key,
    )
    return AppComponents(store=store, storage=storage)
