"""
Database access layer for the feed engine.
Provides per-device key-value storage on top of SQLite.
"""

import sqlite3
import os
from abc import ABC, abstractmethod
from typing import Optional

# Per-device key-value storage, schema version 1
SCHEMA = """
CREATE TABLE IF NOT EXISTS key_value (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


class StorageError(Exception):
    """Raised when the key-value storage cannot be read or written."""


class KeyValueStorage(ABC):
    """String key-value storage, one namespace per device."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is not set."""
        raise NotImplementedError

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class Database(KeyValueStorage):
    """SQLite-backed key-value storage."""

    def __init__(self, db_path: str = "data/feed.db"):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        # Ensure data directory exists
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.db_path = db_path
        try:
            self.conn = sqlite3.connect(db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {db_path}: {e}") from e
        self.conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self):
        """
        Create tables if they don't exist.
        Use PRAGMA user_version for schema migration tracking.
        """
        current_version = self.conn.execute("PRAGMA user_version").fetchone()[0]

        if current_version == 0:
            self.conn.executescript(SCHEMA)
            self.conn.execute("PRAGMA user_version = 1")
            self.conn.commit()

    def close(self):
        self.conn.close()

    # Key-value operations

    def get_item(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored string or None if not found

        Raises:
            StorageError: If the database cannot be read
        """
        try:
            row = self.conn.execute(
                "SELECT value FROM key_value WHERE key = ?",
                (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Error reading {key}: {e}") from e
        return row['value'] if row else None

    def set_item(self, key: str, value: str):
        """
        Insert or replace a value.

        Args:
            key: Storage key
            value: String to store

        Raises:
            StorageError: If the database cannot be written
        """
        try:
            self.conn.execute("""
                INSERT INTO key_value (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE
                SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
            """, (key, value))
            self.conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Error writing {key}: {e}") from e

    def remove_item(self, key: str):
        """
        Delete a value. Missing keys are ignored.

        Raises:
            StorageError: If the database cannot be written
        """
        try:
            self.conn.execute("DELETE FROM key_value WHERE key = ?", (key,))
            self.conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Error removing {key}: {e}") from e
