"""Database connection management for the local SQLite task database.

Connections are opened explicitly and handed to the adapters that use them;
there is no process-wide default handle.
"""

from __future__ import annotations

import os
import sqlite3
import time
from pathlib import Path

from platformdirs import user_data_dir

from taskapp_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from taskapp_cli.repositories.exceptions import StoreUnavailableError

MEMORY_DB = ":memory:"


def default_db_path() -> Path:
    """Default database location inside the user data directory."""
    return Path(user_data_dir("taskapp_cli")) / "taskapp.db"


def open_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open and configure a database connection.

    - Creates the parent directory for file databases
    - Autocommit mode; multi-statement writes use explicit transactions
    - WAL journal and foreign key enforcement
    - Owner-only permissions on newly created database files
    - Runs pending schema migrations

    Args:
        db_path: Path to database file, ``":memory:"``, or None for the default

    Returns:
        Configured sqlite3.Connection

    Raises:
        StoreUnavailableError: If the database cannot be opened or migrated
    """
    if db_path is None:
        db_path = default_db_path()

    in_memory = str(db_path) == MEMORY_DB
    is_new_database = False

    try:
        if not in_memory:
            db_path = Path(db_path)
            db_path.parent.mkdir(parents=True, exist_ok=True)
            is_new_database = not db_path.exists()

        connection = sqlite3.connect(
            str(db_path),
            timeout=30.0,  # Wait up to 30s for locks
            isolation_level=None,
        )
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        if not in_memory:
            connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(db_path, 0o600)

        MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    except (sqlite3.Error, OSError, RuntimeError) as e:
        raise StoreUnavailableError(f"Cannot open task database {db_path}: {e}") from e

    return connection


def execute_with_retry(
    connection: sqlite3.Connection,
    sql: str,
    params: tuple | dict | None = None,
    max_retries: int = 3,
) -> sqlite3.Cursor:
    """Execute SQL with retry logic for database locked errors.

    Raises:
        sqlite3.OperationalError: If database remains locked after retries
    """
    for attempt in range(max_retries):
        try:
            if params:
                return connection.execute(sql, params)
            return connection.execute(sql)
        except sqlite3.OperationalError as e:
            if "database is locked" in str(e) and attempt < max_retries - 1:
                # Exponential backoff: 0.1s, 0.2s, 0.4s
                time.sleep(0.1 * (2**attempt))
                continue
            raise

    raise sqlite3.OperationalError("Max retries exceeded")
