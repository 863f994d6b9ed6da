"""Utility functions for SQLite adapter."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

# Fixed-width UTC format: lexicographic order of stored values is time order.
_DB_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f+00:00"


def to_db_timestamp(value: datetime) -> str:
    """Convert a datetime to its stored UTC text form.

    Naive datetimes are interpreted as local time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(UTC).strftime(_DB_TIMESTAMP_FORMAT)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse datetime from various formats.

    Args:
        value: String, datetime object, or None

    Returns:
        Timezone-aware datetime object or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)

