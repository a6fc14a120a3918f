"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for the users table."""

    def ensure_user(self, telegram_id: int, first_name: Optional[str] = None) -> dict:
        """
        Insert a user if they don't exist, or refresh their name.
        Uses PostgreSQL's ON CONFLICT (upsert) for atomicity.

        Returns:
            Dict with user data: {'id', 'telegram_id', 'first_name'}.
        """
        sql = """
            INSERT INTO users (telegram_id, first_name)
            VALUES (%s, %s)
            ON CONFLICT (telegram_id) DO UPDATE SET first_name = EXCLUDED.first_name
            RETURNING id, telegram_id, first_name;
        """
        try:
            with transaction() as conn, conn.cursor() as cur:
                cur.execute(sql, (telegram_id, first_name))
                row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to ensure user {telegram_id}: {e}")
            raise
        return {"id": row[0], "telegram_id": row[1], "first_name": row[2]}

    def list_telegram_ids(self) -> list[int]:
        """All users known to the bot, oldest first."""
        sql = "SELECT telegram_id FROM users ORDER BY id;"
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(sql)
            return [row[0] for row in cur.fetchall()]
