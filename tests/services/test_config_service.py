"""Unit tests for services/config_service.py.

Uses a real ConfigService pointed at the per-test tmp_path directory.
"""

from __future__ import annotations

import json

import pytest

from taskapp_cli.adapters.memory import InMemoryTaskStore
from taskapp_cli.adapters.sqlite import SqliteTaskStore
from taskapp_cli.models.config_models import AppConfig
from taskapp_cli.services.config_service import (
    ConfigService,
    get_config_service,
    get_storage_strategy_context,
)


@pytest.fixture()
def svc() -> ConfigService:
    service = ConfigService()
    _ = service.config
    return service


# ===========================================================================
# Loading and saving
# ===========================================================================


class TestLoadConfig:
    def test_first_run_writes_defaults(self, svc, isolated_dirs):
        config_file = isolated_dirs / "config.json"
        assert config_file.exists()
        assert json.loads(config_file.read_text())["storage"]["backend"] == "sqlite"

    def test_config_file_is_private(self, svc):
        assert svc.config_path.stat().st_mode & 0o777 == 0o600

    def test_reads_existing_file(self, isolated_dirs):
        (isolated_dirs / "config.json").write_text(
            json.dumps({"ui": {"timezone": "Europe/Paris"}})
        )
        assert ConfigService().config.ui.timezone == "Europe/Paris"

    def test_corrupt_file_raises(self, isolated_dirs):
        (isolated_dirs / "config.json").write_text("{not json")
        with pytest.raises(RuntimeError, match="Failed to load config"):
            _ = ConfigService().config

    def test_invalid_value_raises(self, isolated_dirs):
        (isolated_dirs / "config.json").write_text(
            json.dumps({"storage": {"backend": "cloud"}})
        )
        with pytest.raises(RuntimeError):
            _ = ConfigService().config

    def test_db_path_defaults_to_data_dir(self, svc, isolated_dirs):
        assert svc.db_path == str(isolated_dirs / "taskapp.db")


# ===========================================================================
# Dot-key access
# ===========================================================================


class TestGetSet:
    def test_get_nested_value(self, svc):
        assert svc.get("notifications.enabled") is True

    def test_get_section(self, svc):
        assert svc.get("output").format == "pretty"

    def test_get_unknown_returns_none(self, svc):
        assert svc.get("storage.nope") is None
        assert svc.get("nope.deeper") is None

    def test_set_persists(self, svc):
        svc.set("ui.timezone", "Asia/Tokyo")
        assert ConfigService().config.ui.timezone == "Asia/Tokyo"

    def test_set_unknown_key(self, svc):
        with pytest.raises(KeyError):
            svc.set("storage.colour", "x")

    def test_set_invalid_value(self, svc):
        with pytest.raises(ValueError, match="logging.level"):
            svc.set("logging.level", "LOUD")
        assert svc.get("logging.level") == "INFO"

    def test_set_optional_field_to_none(self, svc):
        svc.set("storage.db_path", "/tmp/x.db")
        svc.set("storage.db_path", None)
        assert svc.get("storage.db_path") is None

    def test_has_key(self, svc):
        assert svc.has_key("storage.db_path")
        assert svc.has_key("storage")
        assert not svc.has_key("storage.db_path.deeper")
        assert not svc.has_key("missing")


class TestReset:
    def test_reset_single_key(self, svc):
        svc.set("output.format", "json")
        svc.reset("output.format")
        assert svc.get("output.format") == "pretty"

    def test_reset_everything(self, svc):
        svc.set("output.color", False)
        svc.set("ui.timezone", "UTC")
        svc.reset()
        assert svc.config == AppConfig()

    def test_reset_unknown_key(self, svc):
        with pytest.raises(KeyError):
            svc.reset("nope")


# ===========================================================================
# Storage strategy
# ===========================================================================


class TestStorageStrategy:
    def test_sqlite_backend_by_default(self, svc):
        context = svc.storage_strategy_context
        assert context.storage_type == "sqlite"
        assert isinstance(context.task_store, SqliteTaskStore)
        context.close()

    def test_memory_backend(self, svc):
        svc.set("storage.backend", "memory")
        context = svc.storage_strategy_context
        assert context.storage_type == "memory"
        assert isinstance(context.task_store, InMemoryTaskStore)

    def test_context_is_cached(self, svc):
        svc.set("storage.backend", "memory")
        assert svc.storage_strategy_context is svc.storage_strategy_context

    def test_set_rebuilds_context(self, svc):
        svc.set("storage.backend", "memory")
        first = svc.storage_strategy_context
        svc.set("storage.backend", "memory")
        assert svc.storage_strategy_context is not first


class TestFactories:
    def test_get_config_service_is_cached(self):
        assert get_config_service() is get_config_service()

    def test_get_storage_strategy_context(self):
        context = get_storage_strategy_context()
        assert context is get_config_service().storage_strategy_context
