"""Shared test fixtures and configuration.

Keeps every test away from the real config, data and log directories.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from taskapp_cli.adapters.memory import InMemoryNotificationCenter, InMemoryTaskStore
from taskapp_cli.models import Task

BASE_DATE = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_task(task_id: int, title: str = "", category: str = "", days: int = 0) -> Task:
    """Task dated *days* after BASE_DATE."""
    return Task(
        id=task_id, title=title, category=category, date=BASE_DATE + timedelta(days=days)
    )


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point platformdirs at *tmp_path* and reset cached singletons."""
    import taskapp_cli.utils.logger as logger_mod
    from taskapp_cli.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    _reset_logger(logger_mod)
    get_config_service.cache_clear()
    with (
        patch("taskapp_cli.services.config_service.user_config_dir", return_value=tmpdir),
        patch("taskapp_cli.services.config_service.user_data_dir", return_value=tmpdir),
        patch("taskapp_cli.adapters.sqlite.connection.user_data_dir", return_value=tmpdir),
        patch("taskapp_cli.utils.logger.user_log_dir", return_value=tmpdir),
    ):
        yield tmp_path
    get_config_service.cache_clear()
    _reset_logger(logger_mod)


def _reset_logger(logger_mod) -> None:
    logger_mod._logger = None
    existing = logging.getLogger("taskapp_cli")
    for handler in list(existing.handlers):
        handler.close()
        existing.removeHandler(handler)


# ---------------------------------------------------------------------------
# In-memory collaborators
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        make_task(1, "Buy milk", "home/shopping", days=0),
        make_task(2, "File taxes", "work", days=2),
        make_task(3, "Water plants", "home", days=1),
        make_task(4, "Standup", "Work", days=3),
    ]


@pytest.fixture()
def memory_store(sample_tasks) -> InMemoryTaskStore:
    return InMemoryTaskStore(sample_tasks)


@pytest.fixture()
def memory_notifications() -> InMemoryNotificationCenter:
    return InMemoryNotificationCenter()


@pytest.fixture()
def task_factory():
    """The ``make_task`` helper, for tests that build their own tasks."""
    return make_task
