"""Task list presenter.

Keeps the visible, date-ordered task collection for the list screen and
orchestrates search and delete against the injected store and notification
center. Rendering goes through a ``TaskListView``; hand-off to the edit flow
goes through a ``TaskNavigator``.

``visible_tasks`` is always the result of a fresh store query (all tasks, or
those whose category starts with the active prefix), newest first. The only
incremental change is the removal of a row after a successful delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, tzinfo

from taskapp_cli.models import EditRequest, Task
from taskapp_cli.repositories import (
    NotificationCenter,
    NotificationError,
    StoreError,
    TaskStore,
)
from taskapp_cli.utils.logger import get_logger

LOAD_FAILED_MESSAGE = "Could not load tasks, try again."
DELETE_FAILED_MESSAGE = "Could not delete task, try again."
NEW_TASK_FAILED_MESSAGE = "Could not prepare a new task, try again."

FIRST_TASK_ID = 1

Row = tuple[str, str]


class TaskListView(ABC):
    """Rendering surface driven by the presenter."""

    @abstractmethod
    def show_rows(self, rows: list[Row]) -> None:
        """Replace the displayed rows with ``(title, date)`` pairs."""

    @abstractmethod
    def remove_row(self, index: int, animation: str | None = None) -> None:
        """Remove one displayed row, optionally animated."""

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Show an inline, recoverable error message."""

    @abstractmethod
    def clear_search(self) -> None:
        """Clear the search input and hide its cancel affordance."""


class TaskNavigator(ABC):
    """Hand-off to the edit flow."""

    @abstractmethod
    def open_editor(self, request: EditRequest) -> None:
        """Open the editor for an existing or a new task."""


def _local_now() -> datetime:
    return datetime.now().astimezone()


class TaskListPresenter:
    """Presenter for the task list screen."""

    def __init__(
        self,
        store: TaskStore,
        notifications: NotificationCenter,
        view: TaskListView,
        navigator: TaskNavigator | None = None,
        *,
        tz: tzinfo | None = None,
        log_pending_on_delete: bool = True,
        clock: Callable[[], datetime] = _local_now,
    ):
        """Initialize the presenter.

        Args:
            store: Record store the list is derived from
            notifications: Notification center for reminder cancellation
            view: View the presenter renders into
            navigator: Edit flow hand-off; optional for list-only use
            tz: Display timezone for row dates (None means local time)
            log_pending_on_delete: Log remaining reminders after each delete
            clock: Source of "now" for new tasks
        """
        self.store = store
        self.notifications = notifications
        self.view = view
        self.navigator = navigator
        self.tz = tz
        self.log_pending_on_delete = log_pending_on_delete
        self.clock = clock
        self.logger = get_logger("presenter")

        self._visible: list[Task] = []
        self._active_prefix: str | None = None

    @property
    def visible_tasks(self) -> tuple[Task, ...]:
        return tuple(self._visible)

    @property
    def active_prefix(self) -> str | None:
        """Category prefix of the active search, or None."""
        return self._active_prefix

    # -- queries ----------------------------------------------------------

    def load_all(self) -> bool:
        """Show every task, newest first, and clear any active search."""
        return self._apply_query(None)

    def search(self, category_prefix: str) -> bool:
        """Show only tasks whose category starts with *category_prefix*."""
        return self._apply_query(category_prefix)

    def cancel_search(self) -> bool:
        """Reset the search heading, then show the full list under it."""
        self.view.clear_search()
        return self.load_all()

    def view_will_appear(self) -> bool:
        """Re-derive the list, keeping the active search (e.g. after editing)."""
        return self._apply_query(self._active_prefix)

    def _apply_query(self, category_prefix: str | None) -> bool:
        try:
            if category_prefix is None:
                tasks = self.store.query_all(sort_key="date", descending=True)
            else:
                tasks = self.store.query_filtered(
                    category_prefix, sort_key="date", descending=True
                )
        except StoreError as e:
            self.logger.error("task query failed (prefix=%r): %s", category_prefix, e)
            self.view.show_error(LOAD_FAILED_MESSAGE)
            return False

        self._visible = tasks
        self._active_prefix = category_prefix
        self.logger.debug(
            "loaded %d task(s) (prefix=%r)", len(tasks), category_prefix
        )
        self.view.show_rows(self.rows())
        return True

    # -- rows -------------------------------------------------------------

    def row_count(self) -> int:
        return len(self._visible)

    def row_content(self, index: int) -> Row:
        """Return ``(title, formatted date)`` for the row at *index*.

        Raises:
            IndexError: If index is out of range
        """
        task = self._task_at(index)
        return task.title, task.format_date(self.tz)

    def rows(self) -> list[Row]:
        return [self.row_content(i) for i in range(self.row_count())]

    def _task_at(self, index: int) -> Task:
        if not 0 <= index < len(self._visible):
            raise IndexError(
                f"row {index} out of range for {len(self._visible)} visible task(s)"
            )
        return self._visible[index]

    # -- navigation -------------------------------------------------------

    def select_row(self, index: int) -> EditRequest:
        """Hand the task at *index* to the edit flow."""
        request = EditRequest(existing_task=self._task_at(index).model_copy())
        if self.navigator is not None:
            self.navigator.open_editor(request)
        return request

    def prepare_new_task(self, now: datetime | None = None) -> EditRequest | None:
        """Build an unsaved task with the next free id and hand it to the edit flow.

        Returns None (after showing an error) if the store cannot be read.
        """
        try:
            max_id = self.store.max_value("id")
        except StoreError as e:
            self.logger.error("could not read max task id: %s", e)
            self.view.show_error(NEW_TASK_FAILED_MESSAGE)
            return None

        task = Task(
            id=FIRST_TASK_ID if max_id is None else max_id + 1,
            date=now if now is not None else self.clock(),
        )
        request = EditRequest(new_task=task)
        if self.navigator is not None:
            self.navigator.open_editor(request)
        return request

    # -- delete -----------------------------------------------------------

    def delete_row(self, index: int, animation: str | None = "fade") -> bool:
        """Delete the task at *index*.

        Cancels the task's pending reminder (best-effort), removes the task in
        a store transaction and, only once that succeeds, drops the row from
        the visible list. A task that is already gone counts as deleted.

        Returns:
            True if the row was removed, False if the store write failed

        Raises:
            IndexError: If index is out of range
        """
        task = self._task_at(index)

        try:
            self.notifications.cancel_pending([str(task.id)])
        except NotificationError as e:
            self.logger.warning("ignoring reminder cancel failure for task %d: %s", task.id, e)

        try:
            with self.store.transaction():
                removed = self.store.delete(task)
        except StoreError as e:
            self.logger.error("delete of task %d failed: %s", task.id, e)
            self.view.show_error(DELETE_FAILED_MESSAGE)
            return False

        if removed:
            self.logger.info("deleted task %d", task.id)
        else:
            self.logger.info("task %d was already deleted", task.id)

        del self._visible[index]
        self.view.remove_row(index, animation)

        if self.log_pending_on_delete:
            self._log_pending_notifications()
        return True

    def _log_pending_notifications(self) -> None:
        try:
            pending = self.notifications.list_pending()
        except NotificationError as e:
            self.logger.debug("could not list pending reminders: %s", e)
            return
        for notification in pending:
            self.logger.debug(
                "pending reminder %s: %s", notification.identifier, notification.payload
            )
