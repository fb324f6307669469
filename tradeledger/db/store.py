"""Key-value stores backing the ledger.

The ledger only needs ``get(key)`` and ``set(key, value)`` over JSON text.
``MemoryStore`` keeps values in a dict; ``SqliteStore`` persists them to a
SQLite file, partitioned by namespace.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal persistence boundary used by the ledger store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-memory key-value store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return sorted(self._data)

    def clear(self) -> None:
        self._data.clear()


class SqliteStore:
    """SQLite-based key-value store."""

    REQUIRED_TABLES = ["kv"]

    def __init__(self, db_path: Path, namespace: str = "default"):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
            namespace: Partition for keys, e.g. one per user.
        """
        self.db_path = db_path
        self.namespace = namespace
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    namespace TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    PRIMARY KEY (namespace, key)
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key.

        Args:
            key: Key to look up.

        Returns:
            Stored text, or None if the key is absent.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT value FROM kv WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            )
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Args:
            key: Key to write.
            value: Text to store.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv (namespace, key, value)
                VALUES (?, ?, ?)
                """,
                (self.namespace, key, value),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Wrote %s/%s (%d bytes)", self.namespace, key, len(value))

    def keys(self) -> list[str]:
        """Get all keys in this namespace."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT key FROM kv WHERE namespace = ? ORDER BY key",
                (self.namespace,),
            )
            return [row["key"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def clear(self) -> None:
        """Delete every key in this namespace."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv WHERE namespace = ?", (self.namespace,))
            conn.commit()
        finally:
            conn.close()
