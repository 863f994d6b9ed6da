"""SQLite adapters - store and notification implementations on a local database."""

from __future__ import annotations

from taskapp_cli.adapters.sqlite.notification_center import SqliteNotificationCenter
from taskapp_cli.adapters.sqlite.task_store import SqliteTaskStore

__all__ = [
    "SqliteTaskStore",
    "SqliteNotificationCenter",
]
