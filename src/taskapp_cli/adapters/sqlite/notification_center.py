"""SQLite implementation of NotificationCenter.

Pending reminders live in the ``pending_notifications`` table of the task
database and are removed when cancelled or delivered.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from taskapp_cli.adapters.sqlite.connection import execute_with_retry, open_connection
from taskapp_cli.adapters.sqlite.utils import parse_datetime, row_to_dict, to_db_timestamp
from taskapp_cli.models import PendingNotification
from taskapp_cli.repositories import NotificationCenter, NotificationError, StoreError


class SqliteNotificationCenter(NotificationCenter):
    """Pending notification queue stored in SQLite."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            try:
                self._connection = open_connection(self.db_path)
            except StoreError as e:
                raise NotificationError(f"Notification store unavailable: {e}") from e
        return self._connection

    def _row_to_notification(self, row: sqlite3.Row) -> PendingNotification:
        data = row_to_dict(row)
        data["fire_at"] = parse_datetime(data["fire_at"])
        data["created_at"] = parse_datetime(data["created_at"])
        return PendingNotification(**data)

    def schedule(self, notification: PendingNotification) -> None:
        try:
            execute_with_retry(
                self.connection,
                """INSERT OR REPLACE INTO pending_notifications
                   (identifier, title, body, fire_at, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    notification.identifier,
                    notification.title,
                    notification.body,
                    to_db_timestamp(notification.fire_at),
                    to_db_timestamp(notification.created_at),
                ),
            )
        except sqlite3.Error as e:
            raise NotificationError(
                f"Could not schedule notification {notification.identifier}: {e}"
            ) from e

    def cancel_pending(self, identifiers: list[str]) -> None:
        if not identifiers:
            return
        placeholders = ", ".join("?" for _ in identifiers)
        try:
            execute_with_retry(
                self.connection,
                f"DELETE FROM pending_notifications WHERE identifier IN ({placeholders})",
                tuple(identifiers),
            )
        except sqlite3.Error as e:
            raise NotificationError(f"Could not cancel notifications: {e}") from e

    def list_pending(self) -> list[PendingNotification]:
        try:
            rows = self.connection.execute(
                "SELECT * FROM pending_notifications ORDER BY fire_at, identifier"
            ).fetchall()
        except sqlite3.Error as e:
            raise NotificationError(f"Could not list notifications: {e}") from e
        return [self._row_to_notification(row) for row in rows]

    def deliver_due(self, now: datetime) -> list[PendingNotification]:
        cutoff = to_db_timestamp(now)
        try:
            self.connection.execute("BEGIN IMMEDIATE")
            rows = self.connection.execute(
                """SELECT * FROM pending_notifications
                   WHERE fire_at <= ? ORDER BY fire_at, identifier""",
                (cutoff,),
            ).fetchall()
            self.connection.execute(
                "DELETE FROM pending_notifications WHERE fire_at <= ?", (cutoff,)
            )
            self.connection.execute("COMMIT")
        except sqlite3.Error as e:
            if self.connection.in_transaction:
                self.connection.execute("ROLLBACK")
            raise NotificationError(f"Could not deliver notifications: {e}") from e
        return [self._row_to_notification(row) for row in rows]
