"""SQLite implementation of TaskStore."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from taskapp_cli.adapters.sqlite.connection import execute_with_retry, open_connection
from taskapp_cli.adapters.sqlite.utils import parse_datetime, row_to_dict, to_db_timestamp
from taskapp_cli.models import SORTABLE_FIELDS, Task
from taskapp_cli.repositories import StoreError, TaskStore, TransactionFailedError
from taskapp_cli.utils.logger import get_logger

_NUMERIC_FIELDS = ("id",)


def _order_by(sort_key: str, descending: bool) -> str:
    if sort_key not in SORTABLE_FIELDS:
        raise ValueError(f"Cannot sort tasks by '{sort_key}'")
    direction = "DESC" if descending else "ASC"
    if sort_key == "id":
        return f" ORDER BY id {direction}"
    return f" ORDER BY {sort_key} {direction}, id {direction}"


class SqliteTaskStore(TaskStore):
    """SQLite implementation of the task store."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task store.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Already-open connection to share with other adapters.
        """
        self.db_path = db_path
        self._connection = connection
        self._depth = 0

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = open_connection(self.db_path)
        return self._connection

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        data = row_to_dict(row)
        data["date"] = parse_datetime(data["date"])
        return Task(**data)

    def _select(self, where: str, params: list, sort_key: str, descending: bool) -> list[Task]:
        query = "SELECT id, title, category, date FROM tasks" + where
        query += _order_by(sort_key, descending)
        try:
            rows = self.connection.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Task query failed: {e}") from e
        return [self._row_to_task(row) for row in rows]

    def query_all(self, sort_key: str = "date", descending: bool = True) -> list[Task]:
        return self._select("", [], sort_key, descending)

    def query_filtered(
        self,
        category_prefix: str,
        sort_key: str = "date",
        descending: bool = True,
    ) -> list[Task]:
        # substr comparison keeps the match case-sensitive and wildcard-free
        where = " WHERE substr(category, 1, length(?)) = ?"
        return self._select(where, [category_prefix, category_prefix], sort_key, descending)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the body in a single SQLite transaction.

        Nested calls join the outermost transaction.
        """
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        try:
            self.connection.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as e:
            raise TransactionFailedError(f"Could not start transaction: {e}") from e

        self._depth = 1
        try:
            yield
            self.connection.execute("COMMIT")
        except (sqlite3.Error, StoreError) as e:
            self._rollback()
            if isinstance(e, TransactionFailedError):
                raise
            raise TransactionFailedError(f"Transaction rolled back: {e}") from e
        except BaseException:
            self._rollback()
            raise
        finally:
            self._depth = 0

    def _rollback(self) -> None:
        if not self.connection.in_transaction:
            return
        try:
            self.connection.execute("ROLLBACK")
        except sqlite3.Error as e:
            get_logger().warning("rollback failed: %s", e)

    def delete(self, task: Task) -> bool:
        try:
            cursor = execute_with_retry(
                self.connection, "DELETE FROM tasks WHERE id = ?", (task.id,)
            )
        except sqlite3.Error as e:
            raise StoreError(f"Could not delete task {task.id}: {e}") from e
        return cursor.rowcount > 0

    def max_value(self, field: str) -> int | None:
        if field not in _NUMERIC_FIELDS:
            raise ValueError(f"'{field}' is not a numeric task field")
        try:
            row = self.connection.execute(f"SELECT MAX({field}) FROM tasks").fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Task query failed: {e}") from e
        return row[0]

    def get(self, task_id: int) -> Task | None:
        try:
            row = self.connection.execute(
                "SELECT id, title, category, date FROM tasks WHERE id = ?", (task_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Task query failed: {e}") from e
        if row is None:
            return None
        return self._row_to_task(row)

    def save(self, task: Task) -> Task:
        try:
            execute_with_retry(
                self.connection,
                """INSERT INTO tasks (id, title, category, date)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(id) DO UPDATE SET
                       title = excluded.title,
                       category = excluded.category,
                       date = excluded.date""",
                (task.id, task.title, task.category, to_db_timestamp(task.date)),
            )
        except sqlite3.Error as e:
            raise StoreError(f"Could not save task {task.id}: {e}") from e
        return task

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
