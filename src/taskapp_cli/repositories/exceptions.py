"""Exceptions raised by store and notification adapters."""


class StoreError(Exception):
    """Base class for record store failures."""


class StoreUnavailableError(StoreError):
    """The record store could not be opened."""


class TransactionFailedError(StoreError):
    """A store transaction failed and was rolled back."""


class TaskNotFoundError(StoreError):
    """No task exists with the requested id."""

    def __init__(self, task_id: int):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class NotificationError(Exception):
    """The notification center could not complete a request."""
