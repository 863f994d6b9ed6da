"""Tests for the task, notification and config models."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from taskapp_cli.models import (
    AppConfig,
    EditRequest,
    PendingNotification,
    Task,
    UIConfig,
)
from taskapp_cli.models.storage_strategy import (
    MemoryStorageStrategy,
    SqliteStorageStrategy,
    StorageStrategyContext,
)


class TestTask:
    def test_defaults(self):
        task = Task(id=1, date=datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert task.title == ""
        assert task.category == ""

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            Task(id=-1, date=datetime.now(timezone.utc))

    def test_naive_date_becomes_aware(self):
        task = Task(id=1, date=datetime(2024, 1, 1, 9, 30))
        assert task.date.tzinfo is not None
        assert task.format_date() == "2024-01-01 09:30"

    def test_format_date_in_zone(self):
        task = Task(id=1, date=datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc))
        assert task.format_date(timezone.utc) == "2024-07-01 12:00"
        assert task.format_date(ZoneInfo("America/New_York")) == "2024-07-01 08:00"

    def test_iso_string_accepted(self):
        task = Task(id=3, date="2024-02-03T04:05:06+00:00")
        assert task.date == datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc)


class TestEditRequest:
    def _task(self):
        return Task(id=1, date=datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_existing(self):
        request = EditRequest(existing_task=self._task())
        assert not request.is_new
        assert request.task.id == 1

    def test_new(self):
        request = EditRequest(new_task=self._task())
        assert request.is_new

    @pytest.mark.parametrize("both", [True, False])
    def test_exactly_one(self, both):
        kwargs = {"existing_task": self._task(), "new_task": self._task()} if both else {}
        with pytest.raises(ValidationError):
            EditRequest(**kwargs)


class TestPendingNotification:
    def test_identifier_required(self):
        with pytest.raises(ValidationError):
            PendingNotification(identifier="", fire_at=datetime.now(timezone.utc))

    def test_created_at_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        notification = PendingNotification(identifier="1", fire_at=before)
        assert notification.created_at - before < timedelta(seconds=5)


class TestConfigModels:
    def test_defaults(self):
        config = AppConfig()
        assert config.storage.backend == "sqlite"
        assert config.storage.db_path is None
        assert config.output.format == "pretty"
        assert config.ui.timezone == "local"
        assert config.notifications.enabled is True
        assert config.notifications.log_pending_on_delete is True
        assert config.logging.level == "INFO"

    def test_unknown_backend(self):
        with pytest.raises(ValidationError):
            AppConfig(storage={"backend": "postgres"})

    def test_timezone_validation(self):
        assert UIConfig(timezone="local").tzinfo() is None
        assert UIConfig(timezone="Europe/Berlin").tzinfo() == ZoneInfo("Europe/Berlin")
        with pytest.raises(ValidationError):
            UIConfig(timezone="Mars/Olympus_Mons")


class TestStorageStrategy:
    def test_memory_strategy(self):
        context = StorageStrategyContext(MemoryStorageStrategy())
        assert context.storage_type == "memory"
        assert context.task_store is context.task_store
        assert context.notification_center.list_pending() == []

    def test_sqlite_strategy_shares_connection(self, tmp_path):
        strategy = SqliteStorageStrategy(db_path=str(tmp_path / "tasks.db"))
        context = StorageStrategyContext(strategy)
        assert context.storage_type == "sqlite"
        assert context.notification_center.connection is context.task_store.connection
        context.close()
