"""Helpers shared by the task commands."""

from __future__ import annotations

from datetime import datetime, tzinfo

import typer

from taskapp_cli.services.config_service import (
    get_config_service,
    get_storage_strategy_context,
)
from taskapp_cli.services.task_list_presenter import (
    TaskListPresenter,
    TaskListView,
    TaskNavigator,
)
from taskapp_cli.services.task_service import TaskService
from taskapp_cli.utils.exit_codes import ERROR_NOT_FOUND, ERROR_STORE

from .decorators import AppError

# Accepted by every --date option.
DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"]


def localize(date: datetime | None, tz: tzinfo | None) -> datetime | None:
    """Read a naive --date in the display timezone (local time when None)."""
    if date is None or date.tzinfo is not None or tz is None:
        return date
    return date.replace(tzinfo=tz)


def make_presenter(
    view: TaskListView, navigator: TaskNavigator | None = None
) -> TaskListPresenter:
    """Build a presenter wired to the configured store and notification center."""
    config = get_config_service().config
    storage = get_storage_strategy_context()
    return TaskListPresenter(
        storage.task_store,
        storage.notification_center,
        view,
        navigator,
        tz=config.ui.tzinfo(),
        log_pending_on_delete=config.notifications.log_pending_on_delete,
    )


def make_task_service() -> TaskService:
    config = get_config_service().config
    storage = get_storage_strategy_context()
    return TaskService(
        storage.task_store,
        storage.notification_center,
        reminders_enabled=config.notifications.enabled,
    )


def load_rows(presenter: TaskListPresenter, search: str | None) -> None:
    """Load all rows, or the rows matching *search*; exit on a store failure."""
    loaded = presenter.load_all() if search is None else presenter.search(search)
    if not loaded:
        # The view has already shown the error
        raise typer.Exit(ERROR_STORE)


def row_index(presenter: TaskListPresenter, row: int) -> int:
    """Convert a 1-based row number into a presenter index.

    Raises:
        AppError: If the row is not currently listed
    """
    count = presenter.row_count()
    if not 1 <= row <= count:
        raise AppError(
            f"No row {row} (the list has {count} row{'s' if count != 1 else ''})",
            exit_code=ERROR_NOT_FOUND,
        )
    return row - 1
