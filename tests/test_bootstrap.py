"""Tests for settings and the application bootstrap factory."""

import json

import pytest
import structlog
from pydantic import ValidationError

from fincontrol.bootstrap import create_app_components, create_storage
from fincontrol.config import (
    DEFAULT_STORAGE_KEY,
    AppSettings,
    Settings,
    StorageSettings,
)
from fincontrol.services import InMemoryStorage, JsonFileStorage


@pytest.fixture(autouse=True)
def reset_logging():
    """create_app_components configures structlog globally; undo it."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no FINCONTROL_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in [
        "FINCONTROL_STORAGE_BACKEND",
        "FINCONTROL_STORAGE_DATA_DIR",
        "FINCONTROL_STORAGE_KEY",
        "FINCONTROL_STORAGE_WRITE_ATTEMPTS",
        "FINCONTROL_LOG_LEVEL",
        "FINCONTROL_JSON_LOGS",
        "FINCONTROL_SEED_ON_STARTUP",
        "FINCONTROL_APP_ENVIRONMENT",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, clean_env):
        """Settings fall back to file storage and INFO logging."""
        storage = StorageSettings()
        app = AppSettings()
        assert storage.backend == "file"
        assert storage.key == DEFAULT_STORAGE_KEY
        assert storage.write_attempts == 3
        assert app.log_level == "INFO"
        assert app.seed_on_startup is True

    def test_environment_overrides(self, clean_env, tmp_path):
        """FINCONTROL_* variables override every default."""
        clean_env.setenv("FINCONTROL_STORAGE_BACKEND", "memory")
        clean_env.setenv("FINCONTROL_STORAGE_DATA_DIR", str(tmp_path / "data"))
        clean_env.setenv("FINCONTROL_LOG_LEVEL", "debug")
        clean_env.setenv("FINCONTROL_SEED_ON_STARTUP", "false")

        settings = Settings()
        assert settings.storage.backend == "memory"
        assert settings.storage.data_dir == tmp_path / "data"
        assert settings.app.log_level == "DEBUG"
        assert settings.app.seed_on_startup is False

    @pytest.mark.parametrize("key", ["a/b", "..", "c\\d"])
    def test_key_cannot_contain_path_separators(self, clean_env, key):
        """Storage keys cannot escape the data directory."""
        with pytest.raises(ValidationError):
            StorageSettings(key=key)

    @pytest.mark.parametrize("attempts", [0, 11])
    def test_write_attempts_bounds(self, clean_env, attempts):
        """Write attempts stay between 1 and 10."""
        with pytest.raises(ValidationError):
            StorageSettings(write_attempts=attempts)

    def test_unknown_backend_rejected(self, clean_env):
        """Only the file and memory backends are accepted."""
        with pytest.raises(ValidationError):
            StorageSettings(backend="sqlite")


class TestBootstrap:
    """Tests for create_app_components."""

    def test_create_storage_selects_backend(self, clean_env, tmp_path):
        """create_storage returns the configured backend."""
        assert isinstance(create_storage(StorageSettings(backend="memory")), InMemoryStorage)

        storage = create_storage(StorageSettings(backend="file", data_dir=tmp_path))
        assert isinstance(storage, JsonFileStorage)
        assert storage.directory == tmp_path

    def test_memory_backend_is_seeded(self, clean_env):
        """Bootstrap seeds an empty memory backend."""
        clean_env.setenv("FINCONTROL_STORAGE_BACKEND", "memory")

        components = create_app_components(Settings())

        assert isinstance(components.storage, InMemoryStorage)
        assert components.storage.contains(DEFAULT_STORAGE_KEY)
        assert len(components.store.get_categories()) == 12

    def test_file_backend_writes_seed_to_disk(self, clean_env, tmp_path):
        """Bootstrap writes the seed file on first start."""
        data_dir = tmp_path / "fin"
        clean_env.setenv("FINCONTROL_STORAGE_DATA_DIR", str(data_dir))

        create_app_components(Settings())

        stored = json.loads((data_dir / f"{DEFAULT_STORAGE_KEY}.json").read_text(encoding="utf-8"))
        assert stored["transactions"] == []
        assert len(stored["categories"]) == 12

    def test_seeding_can_be_disabled(self, clean_env):
        """With seeding off nothing is written at startup."""
        clean_env.setenv("FINCONTROL_SEED_ON_STARTUP", "false")
        storage = InMemoryStorage()

        components = create_app_components(Settings(), storage=storage)

        assert components.storage is storage
        assert not storage.contains(DEFAULT_STORAGE_KEY)
        assert len(components.store.load().categories) == 12

    def test_existing_data_is_not_reseeded(self, clean_env):
        """A second start keeps the stored dataset."""
        storage = InMemoryStorage()
        first = create_app_components(Settings(), storage=storage)
        first.store.delete_category("12")

        second = create_app_components(Settings(), storage=storage)

        assert len(second.store.get_categories()) == 11

    def test_custom_storage_key(self, clean_env):
        """The store uses FINCONTROL_STORAGE_KEY."""
        clean_env.setenv("FINCONTROL_STORAGE_KEY", "household")
        storage = InMemoryStorage()

        components = create_app_components(Settings(), storage=storage)

        assert components.store.key == "household"
        assert storage.contains("household")
        assert not storage.contains(DEFAULT_STORAGE_KEY)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
