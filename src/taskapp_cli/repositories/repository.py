"""Port definitions for taskapp.

This module defines the abstract base classes (interfaces) the task list and
edit flow depend on, following the hexagonal architecture (Ports & Adapters)
pattern. Concrete adapters live in ``taskapp_cli.adapters``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from taskapp_cli.models import PendingNotification, Task


class TaskStore(ABC):
    """Abstract base class for task persistence.

    Query results are always fully ordered: ties on the sort key are broken by
    ``id`` in the same direction.
    """

    @abstractmethod
    def query_all(self, sort_key: str = "date", descending: bool = True) -> list[Task]:
        """Return every task ordered by *sort_key*.

        Raises:
            ValueError: If sort_key is not a sortable field
            StoreError: If the store cannot be read
        """
        raise NotImplementedError("TaskStore.query_all() must be implemented by adapter")

    @abstractmethod
    def query_filtered(
        self,
        category_prefix: str,
        sort_key: str = "date",
        descending: bool = True,
    ) -> list[Task]:
        """Return tasks whose category starts with *category_prefix*.

        The match is a case-sensitive exact prefix; an empty prefix matches
        every task.

        Raises:
            ValueError: If sort_key is not a sortable field
            StoreError: If the store cannot be read
        """
        raise NotImplementedError(
            "TaskStore.query_filtered() must be implemented by adapter"
        )

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Run the ``with`` body atomically.

        On a store failure the transaction is rolled back and
        TransactionFailedError is raised. Any other exception rolls back and
        propagates unchanged.
        """
        raise NotImplementedError(
            "TaskStore.transaction() must be implemented by adapter"
        )

    @abstractmethod
    def delete(self, task: Task) -> bool:
        """Remove *task* by identity.

        Returns:
            True if a row was removed, False if no task had that id
        """
        raise NotImplementedError("TaskStore.delete() must be implemented by adapter")

    @abstractmethod
    def max_value(self, field: str) -> int | None:
        """Return the maximum of a numeric field, or None on an empty store."""
        raise NotImplementedError(
            "TaskStore.max_value() must be implemented by adapter"
        )

    @abstractmethod
    def get(self, task_id: int) -> Task | None:
        """Return the task with *task_id*, or None."""
        raise NotImplementedError("TaskStore.get() must be implemented by adapter")

    @abstractmethod
    def save(self, task: Task) -> Task:
        """Insert *task* or replace the stored task with the same id."""
        raise NotImplementedError("TaskStore.save() must be implemented by adapter")

    def close(self) -> None:
        """Release any resources held by the store."""


class NotificationCenter(ABC):
    """Abstract base class for locally delivered reminders."""

    @abstractmethod
    def schedule(self, notification: PendingNotification) -> None:
        """Schedule *notification*, replacing any with the same identifier."""
        raise NotImplementedError(
            "NotificationCenter.schedule() must be implemented by adapter"
        )

    @abstractmethod
    def cancel_pending(self, identifiers: list[str]) -> None:
        """Cancel pending notifications; unknown identifiers are ignored.

        Raises:
            NotificationError: If the request could not be completed
        """
        raise NotImplementedError(
            "NotificationCenter.cancel_pending() must be implemented by adapter"
        )

    @abstractmethod
    def list_pending(self) -> list[PendingNotification]:
        """Return pending notifications ordered by fire time."""
        raise NotImplementedError(
            "NotificationCenter.list_pending() must be implemented by adapter"
        )

    @abstractmethod
    def deliver_due(self, now: datetime) -> list[PendingNotification]:
        """Remove and return every notification with ``fire_at <= now``."""
        raise NotImplementedError(
            "NotificationCenter.deliver_due() must be implemented by adapter"
        )
