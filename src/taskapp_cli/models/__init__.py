"""taskapp domain models.

Pydantic models for the task entity, the edit hand-off, pending local
notifications and the application configuration.
"""

from .config_models import (
    AppConfig,
    LoggingConfig,
    NotificationConfig,
    OutputConfig,
    StorageConfig,
    UIConfig,
)
from .notification import PendingNotification
from .task import ROW_DATE_FORMAT, SORTABLE_FIELDS, EditRequest, Task

__all__ = [
    # Task models
    "Task",
    "EditRequest",
    "ROW_DATE_FORMAT",
    "SORTABLE_FIELDS",
    # Notification models
    "PendingNotification",
    # Config models
    "AppConfig",
    "StorageConfig",
    "OutputConfig",
    "UIConfig",
    "NotificationConfig",
    "LoggingConfig",
]
