"""
repositories/state_repo.py
--------------------------
Key-value persistence for per-user budget state.
Each key holds one JSON document in the `budget_state` table.
"""

from typing import Any

from psycopg2.extras import Json

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)


class StateRepository:
    """Repository for the budget_state key-value table."""

    def load_all(self, user_id: int) -> dict[str, Any]:
        """
        Fetch every stored key for a user.

        Returns:
            Mapping of key -> decoded JSON value (empty for new users).
        """
        sql = "SELECT key, value FROM budget_state WHERE user_id = %s;"
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(sql, (user_id,))
            rows = cur.fetchall()
        logger.debug(f"Loaded {len(rows)} state keys for user {user_id}")
        return {key: value for key, value in rows}

    def save(self, user_id: int, key: str, value: Any) -> None:
        """
        Upsert one key for a user.

        Raises:
            psycopg2.Error: Propagated after rollback and logging.
        """
        sql = """
            INSERT INTO budget_state (user_id, key, value, updated_at)
            VALUES (%s, %s, %s, NOW())
            ON CONFLICT (user_id, key)
            DO UPDATE SET value = EXCLUDED.value, updated_at = NOW();
        """
        try:
            with transaction() as conn, conn.cursor() as cur:
                cur.execute(sql, (user_id, key, Json(value)))
        except Exception as e:
            logger.error(f"Failed to save '{key}' for user {user_id}: {e}")
            raise

    def delete_all(self, user_id: int) -> int:
        """Remove every stored key for a user. Returns the number of rows deleted."""
        sql = "DELETE FROM budget_state WHERE user_id = %s;"
        try:
            with transaction() as conn, conn.cursor() as cur:
                cur.execute(sql, (user_id,))
                deleted = cur.rowcount
        except Exception as e:
            logger.error(f"Failed to reset state for user {user_id}: {e}")
            raise
        logger.info(f"Reset budget state for user {user_id} ({deleted} keys)")
        return deleted
