"""Configuration package."""

from fincontrol.config.settings import (
    DEFAULT_STORAGE_KEY,
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "AppSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
