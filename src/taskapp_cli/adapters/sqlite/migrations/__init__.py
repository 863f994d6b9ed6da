"""Schema migrations for the local task database."""

from .m001_initial_schema import ALL_MIGRATIONS, InitialSchemaMigration
from .runner import Migration, MigrationRunner

__all__ = [
    "ALL_MIGRATIONS",
    "InitialSchemaMigration",
    "Migration",
    "MigrationRunner",
]
