"""Storage layer for WikiSearch.

Provides the database connection manager and page lookups.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from WikiSearch.storage.db import DatabaseManager
from WikiSearch.storage.pages import PageRow, PageStore
from WikiSearch.utils.log import log

if TYPE_CHECKING:
    from WikiSearch.config import AppConfig


def create_storage(config: AppConfig) -> tuple[DatabaseManager, PageStore]:
    """Create the database manager and page store.

    Args:
        config: Application configuration containing database settings.

    Returns:
        Tuple of (db_manager, page_store).
    """
    db_path = Path(config.database.path)
    db_manager = DatabaseManager(db_path)
    log.info("Page database: %s", db_path)
    return db_manager, PageStore(db_manager)


__all__ = [
    "DatabaseManager",
    "PageRow",
    "PageStore",
    "create_storage",
]
