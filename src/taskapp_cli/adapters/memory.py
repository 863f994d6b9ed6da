"""In-memory adapters.

Dict-backed store and notification center for the ``memory`` storage backend.
Nothing survives the process.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from taskapp_cli.models import SORTABLE_FIELDS, PendingNotification, Task
from taskapp_cli.repositories import (
    NotificationCenter,
    StoreError,
    TaskStore,
    TransactionFailedError,
)


class InMemoryTaskStore(TaskStore):
    """Task store kept in a dict keyed by task id."""

    def __init__(self, tasks: list[Task] | None = None):
        self._tasks: dict[int, Task] = {}
        self._in_transaction = False
        for task in tasks or []:
            self._tasks[task.id] = task.model_copy()

    def _sorted(self, tasks: list[Task], sort_key: str, descending: bool) -> list[Task]:
        if sort_key not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort tasks by '{sort_key}'")
        ordered = sorted(
            tasks, key=lambda t: (getattr(t, sort_key), t.id), reverse=descending
        )
        return [t.model_copy() for t in ordered]

    def query_all(self, sort_key: str = "date", descending: bool = True) -> list[Task]:
        return self._sorted(list(self._tasks.values()), sort_key, descending)

    def query_filtered(
        self,
        category_prefix: str,
        sort_key: str = "date",
        descending: bool = True,
    ) -> list[Task]:
        matching = [
            t for t in self._tasks.values() if t.category.startswith(category_prefix)
        ]
        return self._sorted(matching, sort_key, descending)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._in_transaction:
            yield
            return

        snapshot = dict(self._tasks)
        self._in_transaction = True
        try:
            yield
        except StoreError as e:
            self._tasks = snapshot
            if isinstance(e, TransactionFailedError):
                raise
            raise TransactionFailedError(f"Transaction rolled back: {e}") from e
        except BaseException:
            self._tasks = snapshot
            raise
        finally:
            self._in_transaction = False

    def delete(self, task: Task) -> bool:
        return self._tasks.pop(task.id, None) is not None

    def max_value(self, field: str) -> int | None:
        if field != "id":
            raise ValueError(f"'{field}' is not a numeric task field")
        return max(self._tasks, default=None)

    def get(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return task.model_copy() if task is not None else None

    def save(self, task: Task) -> Task:
        self._tasks[task.id] = task.model_copy()
        return task


class InMemoryNotificationCenter(NotificationCenter):
    """Pending notifications kept in a dict keyed by identifier."""

    def __init__(self):
        self._pending: dict[str, PendingNotification] = {}

    def schedule(self, notification: PendingNotification) -> None:
        self._pending[notification.identifier] = notification

    def cancel_pending(self, identifiers: list[str]) -> None:
        for identifier in identifiers:
            self._pending.pop(identifier, None)

    def list_pending(self) -> list[PendingNotification]:
        return sorted(self._pending.values(), key=lambda n: (n.fire_at, n.identifier))

    def deliver_due(self, now: datetime) -> list[PendingNotification]:
        due = [n for n in self.list_pending() if n.fire_at <= now]
        for notification in due:
            del self._pending[notification.identifier]
        return due
