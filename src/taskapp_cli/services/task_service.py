"""Task service - the edit flow.

Loads tasks for editing and persists the result of an edit. Reminders are
scheduled only when explicitly requested.
"""

from __future__ import annotations

from datetime import datetime

from taskapp_cli.models import PendingNotification, Task
from taskapp_cli.repositories import (
    NotificationCenter,
    TaskNotFoundError,
    TaskStore,
)
from taskapp_cli.utils.logger import get_logger


class TaskService:
    """Service for loading and saving individual tasks."""

    def __init__(
        self,
        store: TaskStore,
        notifications: NotificationCenter | None = None,
        *,
        reminders_enabled: bool = True,
    ):
        """Initialize the task service.

        Args:
            store: TaskStore implementation for data access
            notifications: Notification center used for reminders
            reminders_enabled: When False, reminder requests are ignored
        """
        self.store = store
        self.notifications = notifications
        self.reminders_enabled = reminders_enabled
        self.logger = get_logger("tasks")

    def get_task(self, task_id: int) -> Task:
        """Get a task by id.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        task = self.store.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def save_task(self, task: Task, *, remind: bool = False) -> Task:
        """Persist *task* (insert or replace) in one transaction.

        Args:
            task: Task produced by the edit flow
            remind: Schedule a reminder at the task's date

        Returns:
            The saved task
        """
        with self.store.transaction():
            self.store.save(task)
        self.logger.info("saved task %d", task.id)

        if remind:
            self.schedule_reminder(task)
        return task

    def update_task(
        self,
        task_id: int,
        *,
        title: str | None = None,
        category: str | None = None,
        date: datetime | None = None,
        remind: bool = False,
    ) -> Task:
        """Apply the given field changes to a stored task.

        A reminder already pending for the task follows a date change.
        """
        current = self.get_task(task_id)
        changes = {
            key: value
            for key, value in (("title", title), ("category", category), ("date", date))
            if value is not None
        }
        updated = Task(**{**current.model_dump(), **changes})

        self.save_task(updated, remind=remind)
        if not remind and updated.date != current.date and self._has_pending(task_id):
            self.schedule_reminder(updated)
        return updated

    def schedule_reminder(self, task: Task) -> bool:
        """Schedule (or replace) the reminder for *task* at its date.

        Returns:
            True if a reminder was scheduled

        Raises:
            NotificationError: If the notification center rejects the request
        """
        if self.notifications is None or not self.reminders_enabled:
            self.logger.info("reminders disabled; not scheduling task %d", task.id)
            return False

        self.notifications.schedule(
            PendingNotification(
                identifier=str(task.id),
                title=task.title or "Task reminder",
                body=task.category,
                fire_at=task.date,
            )
        )
        self.logger.info("scheduled reminder for task %d at %s", task.id, task.date)
        return True

    def _has_pending(self, task_id: int) -> bool:
        if self.notifications is None:
            return False
        identifier = str(task_id)
        return any(n.identifier == identifier for n in self.notifications.list_pending())
