"""SQLite persistence for questionnaires and generated plans."""

from wellplan.db.connection import DatabaseConnection
from wellplan.db.store import ProfileStore, SQLiteProfileStore

__all__ = [
    "DatabaseConnection",
    "ProfileStore",
    "SQLiteProfileStore",
]
