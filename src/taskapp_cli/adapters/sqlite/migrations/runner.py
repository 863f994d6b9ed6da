"""Migration framework for SQLite database schema evolution.

Sequential, forward-only migrations tracked in a ``schema_version`` table and
applied automatically when a connection is opened.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from datetime import UTC, datetime


class Migration(ABC):
    """Base class for database migrations."""

    @property
    @abstractmethod
    def version(self) -> int:
        """Migration version number (sequential)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the migration."""

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Execute forward migration."""


class MigrationRunner:
    """Manages and executes database migrations."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self._ensure_version_table()

    def _ensure_version_table(self) -> None:
        self.connection.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                description TEXT NOT NULL,
                applied_at TEXT NOT NULL
            )
        """)

    def get_current_version(self) -> int:
        """Get current database schema version (0 if no migrations applied)."""
        cursor = self.connection.execute("SELECT MAX(version) FROM schema_version")
        result = cursor.fetchone()[0]
        return result if result is not None else 0

    def run_migration(self, migration: Migration) -> None:
        """Run a single migration inside its own transaction.

        Raises:
            ValueError: If migration version is not greater than current version
            RuntimeError: If the migration fails (the transaction is rolled back)
        """
        current_version = self.get_current_version()

        if migration.version <= current_version:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current_version}"
            )

        try:
            self.connection.execute("BEGIN")
            migration.up(self.connection)
            self.connection.execute(
                """
                INSERT INTO schema_version (version, description, applied_at)
                VALUES (?, ?, ?)
                """,
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.execute("COMMIT")
        except Exception as e:
            if self.connection.in_transaction:
                self.connection.execute("ROLLBACK")
            raise RuntimeError(f"Migration {migration.version} failed: {str(e)}") from e

    def run_migrations(self, migrations: list[Migration]) -> int:
        """Run all pending migrations in version order.

        Returns:
            Number of migrations applied
        """
        current_version = self.get_current_version()
        pending = [
            m
            for m in sorted(migrations, key=lambda m: m.version)
            if m.version > current_version
        ]

        for migration in pending:
            self.run_migration(migration)

        return len(pending)

    def get_migration_history(self) -> list[dict]:
        """Get history of applied migrations."""
        cursor = self.connection.execute("""
            SELECT version, description, applied_at
            FROM schema_version
            ORDER BY version
            """)

        return [
            {"version": row[0], "description": row[1], "applied_at": row[2]}
            for row in cursor.fetchall()
        ]
