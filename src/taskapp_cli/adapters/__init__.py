"""Adapters module - Port implementations for different storage backends.

This package contains concrete implementations (adapters) of the store and
notification interfaces:
- sqlite: Local SQLite database storage
- memory: In-process storage that lasts for one run
"""

from .memory import InMemoryNotificationCenter, InMemoryTaskStore
from .sqlite import SqliteNotificationCenter, SqliteTaskStore

__all__ = [
    # SQLite adapters
    "SqliteTaskStore",
    "SqliteNotificationCenter",
    # In-memory adapters
    "InMemoryTaskStore",
    "InMemoryNotificationCenter",
]
