"""SQLite database utilities for the wiki page table."""

from __future__ import annotations

import sqlite3
from pathlib import Path


class DatabaseManager:
    """Shared database connection manager.

    Uses a singleton so the page store and the completion fallback share one
    connection per process. Supports the context manager protocol for
    automatic connection cleanup.
    """

    _instance = None

    def __new__(cls, db_path: Path):
        """Create or return the existing DatabaseManager instance.

        Args:
            db_path: Path to the database file, or ":memory:".

        Returns:
            DatabaseManager singleton instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.conn = ensure_db(db_path)
            init_schema(cls._instance.conn)
        return cls._instance

    def get_connection(self) -> sqlite3.Connection:
        return self.conn

    def close(self) -> None:
        """Close the connection and reset the singleton.

        Allows creating a new instance with a different database path.
        """
        if hasattr(self, "conn") and self.conn:
            self.conn.close()
            type(self)._instance = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def ensure_db(db_path: Path) -> sqlite3.Connection:
    """Ensure the database file exists and return a connection.

    Args:
        db_path: Path to the database file, or ":memory:".

    Returns:
        SQLite connection.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    if str(db_path) == ":memory:":
        return sqlite3.connect(":memory:")
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(str(db_path))


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the page table when it is missing.

    The layout follows the wiki `page` table: titles are stored without
    namespace prefix and with underscores instead of spaces.

    Args:
        conn: SQLite connection.
    """
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS page (
          page_id INTEGER PRIMARY KEY AUTOINCREMENT,
          page_namespace INTEGER NOT NULL,
          page_title TEXT NOT NULL,
          page_is_redirect INTEGER NOT NULL DEFAULT 0,
          page_len INTEGER NOT NULL DEFAULT 0,
          UNIQUE(page_namespace, page_title)
        );

        CREATE INDEX IF NOT EXISTS idx_page_title
          ON page(page_title);
    """)
    conn.commit()
