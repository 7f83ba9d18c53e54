"""Profile Store: persistence of questionnaires and generated plans.

``ProfileStore`` is the async interface the orchestrator talks to. The
SQLite implementation runs the blocking sqlite3 calls in a worker thread
and writes the questionnaire and the plan bundle in one transaction.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
from typing import Any, Optional, Protocol

from wellplan.db.connection import DatabaseConnection
from wellplan.errors import PersistenceError, UnavailableInputError

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Async read/write access to a user's quiz data and plans.

    Implementations report storage failures as PersistenceError, keeping
    the backend exception as ``cause``. load_questionnaire raises
    UnavailableInputError when nothing is stored for the user.
    """

    async def save_plans(
        self,
        user_id: str,
        questionnaire: dict[str, Any],
        plans: dict[str, Any],
    ) -> None:
        ...

    async def load_plans(self, user_id: str) -> Optional[dict[str, Any]]:
        ...

    async def load_questionnaire(self, user_id: str) -> dict[str, Any]:
        ...


class ProfileQueries:
    """Database queries for profiles and generated plans."""

    @staticmethod
    def upsert_profile(
        conn: sqlite3.Connection, user_id: str, quiz_data: dict[str, Any]
    ) -> None:
        """Insert or replace the stored questionnaire for a user."""
        conn.execute(
            """
            INSERT INTO profiles (user_id, quiz_data, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(user_id) DO UPDATE SET
                quiz_data = excluded.quiz_data,
                updated_at = excluded.updated_at
            """,
            (user_id, json.dumps(quiz_data, sort_keys=True)),
        )

    @staticmethod
    def insert_plans(
        conn: sqlite3.Connection, user_id: str, plans: dict[str, Any]
    ) -> int:
        """Store a generated plan bundle and return its plan_id."""
        cursor = conn.execute(
            "INSERT INTO generated_plans (user_id, plans) VALUES (?, ?)",
            (user_id, json.dumps(plans, ensure_ascii=False)),
        )
        return cursor.lastrowid or 0

    @staticmethod
    def get_profile(conn: sqlite3.Connection, user_id: str) -> Optional[dict[str, Any]]:
        """Get the stored questionnaire for a user."""
        row = conn.execute(
            "SELECT quiz_data FROM profiles WHERE user_id = ?",
            (user_id,),
        ).fetchone()
        if row is None:
            return None
        return json.loads(row["quiz_data"])

    @staticmethod
    def get_latest_plans(
        conn: sqlite3.Connection, user_id: str
    ) -> Optional[dict[str, Any]]:
        """Get the most recently generated plan bundle for a user."""
        row = conn.execute(
            """
            SELECT plans FROM generated_plans
            WHERE user_id = ?
            ORDER BY plan_id DESC LIMIT 1
            """,
            (user_id,),
        ).fetchone()
        if row is None:
            return None
        return json.loads(row["plans"])


class SQLiteProfileStore:
    """ProfileStore backed by a local SQLite database."""

    def __init__(self, db: DatabaseConnection):
        """Initialize the store and create tables if needed.

        Args:
            db: Database connection manager

        Raises:
            PersistenceError: If the schema cannot be created
        """
        self.db = db
        try:
            self.db.initialize_schema()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not initialize {db.db_path}: {e}", cause=e)

    def _save(self, user_id: str, questionnaire: dict[str, Any], plans: dict[str, Any]) -> int:
        with self.db.get_connection() as conn:
            ProfileQueries.upsert_profile(conn, user_id, questionnaire)
            return ProfileQueries.insert_plans(conn, user_id, plans)

    def _load_plans(self, user_id: str) -> Optional[dict[str, Any]]:
        with self.db.get_connection() as conn:
            return ProfileQueries.get_latest_plans(conn, user_id)

    def _load_questionnaire(self, user_id: str) -> Optional[dict[str, Any]]:
        with self.db.get_connection() as conn:
            return ProfileQueries.get_profile(conn, user_id)

    async def save_plans(
        self,
        user_id: str,
        questionnaire: dict[str, Any],
        plans: dict[str, Any],
    ) -> None:
        """Store the questionnaire and plans for a user, all or nothing.

        Raises:
            PersistenceError: If the write fails (nothing is stored)
        """
        try:
            plan_id = await asyncio.to_thread(self._save, user_id, questionnaire, plans)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not save plans for {user_id!r}: {e}", cause=e)
        logger.debug("Saved plan bundle %d for user %s", plan_id, user_id)

    async def load_plans(self, user_id: str) -> Optional[dict[str, Any]]:
        """Load the latest plan bundle for a user, or None if there is none.

        Raises:
            PersistenceError: If the read fails
        """
        try:
            return await asyncio.to_thread(self._load_plans, user_id)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not load plans for {user_id!r}: {e}", cause=e)

    async def load_questionnaire(self, user_id: str) -> dict[str, Any]:
        """Load the stored questionnaire for a user.

        Raises:
            UnavailableInputError: If the user has no stored questionnaire
            PersistenceError: If the read fails
        """
        try:
            data = await asyncio.to_thread(self._load_questionnaire, user_id)
        except sqlite3.Error as e:
            raise PersistenceError(
                f"Could not load questionnaire for {user_id!r}: {e}", cause=e
            )
        if data is None:
            raise UnavailableInputError(f"No questionnaire stored for user {user_id!r}")
        return data
