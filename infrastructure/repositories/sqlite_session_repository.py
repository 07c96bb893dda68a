import sqlite3
import json
import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any

log = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
USER_KEY = "userData"


class SQLiteSessionRepository:
    """
    Device-local persistent session store (auth token + user record).
    Errors never propagate: writes return False, reads return None.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _conn(self):
        conn = sqlite3.connect(self.db_path)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        return conn

    def _get(self, key: str) -> Optional[str]:
        with self._conn() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def save(self, token: str, user: Dict[str, Any]) -> bool:
        now_iso = datetime.now(timezone.utc).isoformat()
        try:
            user_json = json.dumps(user)
            with self._conn() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                    (TOKEN_KEY, token, now_iso),
                )
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                    (USER_KEY, user_json, now_iso),
                )
                conn.commit()
            return True
        except (sqlite3.Error, TypeError, ValueError) as e:
            log.error(f"Error saving user data: {e}", exc_info=True)
            return False

    def get_token(self) -> Optional[str]:
        try:
            return self._get(TOKEN_KEY)
        except sqlite3.Error as e:
            log.error(f"Error getting token: {e}", exc_info=True)
            return None

    def get_user(self) -> Optional[Dict[str, Any]]:
        try:
            raw = self._get(USER_KEY)
            return json.loads(raw) if raw else None
        except (sqlite3.Error, ValueError) as e:
            log.error(f"Error getting user data: {e}", exc_info=True)
            return None

    def update_user(self, user: Dict[str, Any]) -> bool:
        """Replaces the stored user record, keeping the token as is."""
        try:
            with self._conn() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                    (USER_KEY, json.dumps(user), datetime.now(timezone.utc).isoformat()),
                )
                conn.commit()
            return True
        except (sqlite3.Error, TypeError, ValueError) as e:
            log.error(f"Error updating user data: {e}", exc_info=True)
            return False

    def clear(self) -> bool:
        try:
            with self._conn() as conn:
                conn.execute("DELETE FROM kv_store WHERE key IN (?, ?)", (TOKEN_KEY, USER_KEY))
                conn.commit()
            return True
        except sqlite3.Error as e:
            log.error(f"Error clearing user data: {e}", exc_info=True)
            return False
