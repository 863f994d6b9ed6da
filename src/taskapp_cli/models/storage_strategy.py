"""
Strategy Pattern: Storage Strategy Container

The StorageStrategyContext holds the backend chosen at startup and hands the
same store and notification center to every service that asks for them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskapp_cli.repositories import NotificationCenter, TaskStore


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy encapsulates the store and notification implementations for
    one storage backend.
    """

    @abstractmethod
    def get_task_store(self) -> TaskStore:
        """Get task store implementation for this strategy."""

    @abstractmethod
    def get_notification_center(self) -> NotificationCenter:
        """Get notification center implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class SqliteStorageStrategy(StorageStrategy):
    """
    Local SQLite storage strategy.

    The store and the notification center share one connection, opened on
    first use.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path

        # Import here to avoid circular dependencies
        from taskapp_cli.adapters.sqlite import SqliteTaskStore

        self._task_store = SqliteTaskStore(db_path=db_path)
        self._notification_center: NotificationCenter | None = None

    def get_task_store(self) -> TaskStore:
        return self._task_store

    def get_notification_center(self) -> NotificationCenter:
        if self._notification_center is None:
            from taskapp_cli.adapters.sqlite import SqliteNotificationCenter

            self._notification_center = SqliteNotificationCenter(
                connection=self._task_store.connection
            )
        return self._notification_center

    @property
    def storage_type(self) -> str:
        return "sqlite"


class MemoryStorageStrategy(StorageStrategy):
    """In-process storage strategy; data lasts for one run."""

    def __init__(self):
        from taskapp_cli.adapters.memory import (
            InMemoryNotificationCenter,
            InMemoryTaskStore,
        )

        self._task_store = InMemoryTaskStore()
        self._notification_center = InMemoryNotificationCenter()

    def get_task_store(self) -> TaskStore:
        return self._task_store

    def get_notification_center(self) -> NotificationCenter:
        return self._notification_center

    @property
    def storage_type(self) -> str:
        return "memory"


class StorageStrategyContext:
    """
    Context holder for the storage strategy.

    Created once at startup; services receive their collaborators from it.
    """

    def __init__(self, strategy: StorageStrategy):
        self._strategy = strategy

    @property
    def task_store(self) -> TaskStore:
        return self._strategy.get_task_store()

    @property
    def notification_center(self) -> NotificationCenter:
        return self._strategy.get_notification_center()

    @property
    def storage_type(self) -> str:
        return self._strategy.storage_type

    def close(self) -> None:
        self.task_store.close()
