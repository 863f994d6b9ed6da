"""Repository interfaces for taskapp.

This package contains abstract base classes (ABCs) that define the contracts
for persistence and reminder delivery. These are the "Ports" in the Hexagonal
Architecture.

Implementations (Adapters) are in:
- taskapp_cli.adapters.sqlite (local SQLite storage)
- taskapp_cli.adapters.memory (in-process storage)
"""

from .exceptions import (
    NotificationError,
    StoreError,
    StoreUnavailableError,
    TaskNotFoundError,
    TransactionFailedError,
)
from .repository import NotificationCenter, TaskStore

__all__ = [
    "TaskStore",
    "NotificationCenter",
    "StoreError",
    "StoreUnavailableError",
    "TransactionFailedError",
    "TaskNotFoundError",
    "NotificationError",
]
