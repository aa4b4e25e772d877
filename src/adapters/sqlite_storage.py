"""SQLite storage adapter.

Implements the core CredentialStorePort using a simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from core.models import UserStats


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the CredentialStorePort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - user_api_keys: one shortening-service key per user
        - user_stats: per-user usage counters
        """

        with self._connect() as conn:
            # Fields:
            # - user_id: Telegram user id (PRIMARY KEY)
            # - api_key: the user's key for the shortening service
            # - created_at / updated_at: ISO timestamps (UTC)
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS user_api_keys (
                    user_id INTEGER PRIMARY KEY,
                    api_key TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )
            # Stats outlive key removal so a returning user keeps their totals.
            # Fields:
            # - user_id: Telegram user id (PRIMARY KEY)
            # - total_urls_shortened: running count of replaced URLs
            # - first_use / last_use: ISO timestamps (UTC)
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS user_stats (
                    user_id INTEGER PRIMARY KEY,
                    total_urls_shortened INTEGER NOT NULL DEFAULT 0,
                    first_use TIMESTAMP NOT NULL,
                    last_use TIMESTAMP NOT NULL
                )
                """
            )

    def set_credential(self, user_id: int, credential: str) -> None:
        """Upsert the API key for a user and touch their stats row."""

        if not user_id or not credential or not credential.strip():
            raise ValueError("User ID and API key are required")

        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO user_api_keys (user_id, api_key, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    api_key = excluded.api_key,
                    updated_at = excluded.updated_at
                """,
                (user_id, credential.strip(), now, now),
            )
            conn.execute(
                """
                INSERT INTO user_stats (user_id, first_use, last_use)
                VALUES (?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET last_use = excluded.last_use
                """,
                (user_id, now, now),
            )

    def get_credential(self, user_id: int) -> Optional[str]:
        """Return the stored API key for a user, if any."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT api_key FROM user_api_keys WHERE user_id = ?",
                (user_id,),
            ).fetchone()
        return row["api_key"] if row else None

    def has_credential(self, user_id: int) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM user_api_keys WHERE user_id = ?",
                (user_id,),
            ).fetchone()
        return row is not None

    def remove_credential(self, user_id: int) -> bool:
        """Delete a user's API key; return False if none was stored."""

        with self._connect() as conn:
            cur = conn.execute(
                "DELETE FROM user_api_keys WHERE user_id = ?",
                (user_id,),
            )
            return cur.rowcount > 0

    def update_stats(self, user_id: int, url_count: int = 1) -> None:
        """Add ``url_count`` shortened URLs to the user's running total."""

        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO user_stats (user_id, total_urls_shortened, first_use, last_use)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    total_urls_shortened = user_stats.total_urls_shortened + excluded.total_urls_shortened,
                    last_use = excluded.last_use
                """,
                (user_id, url_count, now, now),
            )

    def get_stats(self, user_id: int) -> Optional[UserStats]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM user_stats WHERE user_id = ?",
                (user_id,),
            ).fetchone()
        if row is None:
            return None
        return UserStats(
            user_id=int(row["user_id"]),
            total_urls_shortened=int(row["total_urls_shortened"]),
            first_use=_parse_timestamp(row["first_use"]),
            last_use=_parse_timestamp(row["last_use"]),
        )

    def count_users(self) -> int:
        """Return the number of users with a stored API key."""

        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM user_api_keys").fetchone()
        return int(row["total"])

    def list_user_ids(self) -> List[int]:
        with self._connect() as conn:
            rows = conn.execute("SELECT user_id FROM user_api_keys ORDER BY user_id").fetchall()
        return [int(row["user_id"]) for row in rows]
