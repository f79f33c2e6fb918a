"""SQLite-backed key-value storage for local device state."""

import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..errors import PersistenceError
from ..logging.config import get_logger


class SqliteKeyValueStorage:
    """Single-table string key-value store, the local analogue of browser storage."""

    def __init__(self, db_path: str = "purchases.db"):
        self.db_path = Path(db_path)
        self.logger = get_logger("storefront.kv_store")
        self._lock = threading.Lock()
        self._schema_ready = False

        try:
            self._init_database()
        except PersistenceError as e:
            # Retried on first access; reads and writes surface the failure
            self.logger.warning("Purchase database unavailable", db_path=str(self.db_path), error=str(e))

    def _init_database(self) -> None:
        """Initialize database schema."""
        if self._schema_ready:
            return
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        self._schema_ready = True

    @contextmanager
    def _get_connection(self):
        """Get database connection, converting driver errors to PersistenceError."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            raise PersistenceError(
                f"Database error: {e}",
                target=str(self.db_path)
            ) from e
        finally:
            if conn:
                conn.close()

    def get(self, key: str) -> Optional[str]:
        """Return the stored value for key, or None when the slot is empty."""
        self._init_database()
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Write value into the slot for key, replacing any previous value."""
        with self._lock:
            self._init_database()
            with self._get_connection() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                    (key, value, datetime.now(timezone.utc).isoformat())
                )
                conn.commit()

    def delete(self, key: str) -> None:
        """Clear the slot for key."""
        with self._lock:
            self._init_database()
            with self._get_connection() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
