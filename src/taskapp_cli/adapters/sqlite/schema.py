"""Database schema definitions for the local task database."""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

# Tasks table - one row per to-do item.
# Dates are UTC timestamps in a fixed-width ISO format so text order is time order.
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    category TEXT NOT NULL DEFAULT '',
    date TEXT NOT NULL
)
"""

# Pending local notifications, keyed by the owning task's id
CREATE_PENDING_NOTIFICATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS pending_notifications (
    identifier TEXT PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    body TEXT NOT NULL DEFAULT '',
    fire_at TEXT NOT NULL,
    created_at TEXT NOT NULL
)
"""

CREATE_TASKS_DATE_INDEX = """
CREATE INDEX IF NOT EXISTS idx_tasks_date ON tasks(date DESC, id DESC)
"""

CREATE_TASKS_CATEGORY_INDEX = """
CREATE INDEX IF NOT EXISTS idx_tasks_category ON tasks(category)
"""

CREATE_PENDING_FIRE_AT_INDEX = """
CREATE INDEX IF NOT EXISTS idx_pending_notifications_fire_at
ON pending_notifications(fire_at)
"""

ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_PENDING_NOTIFICATIONS_TABLE,
]

ALL_INDEXES = [
    CREATE_TASKS_DATE_INDEX,
    CREATE_TASKS_CATEGORY_INDEX,
    CREATE_PENDING_FIRE_AT_INDEX,
]
