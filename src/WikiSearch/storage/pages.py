"""Page lookups used by query rewriting and result materialization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from WikiSearch.core.namespaces import NS_CATEGORY, normalize_name
from WikiSearch.utils.log import log

if TYPE_CHECKING:
    from WikiSearch.storage.db import DatabaseManager


@dataclass(frozen=True, slots=True)
class PageRow:
    """One row of the page table."""

    page_id: int
    namespace: int
    title: str


class PageStore:
    """SQLite-backed access to the wiki page table."""

    def __init__(self, db_manager: DatabaseManager):
        """Initialize page store.

        Args:
            db_manager: Shared database manager instance.
        """
        log.debug("Initializing PageStore")
        self.conn = db_manager.get_connection()

    def category_id(self, name: str) -> int:
        """Return the page id of a category page, or 0 when it does not exist.

        Args:
            name: Category name without namespace prefix.
        """
        row = self.conn.execute(
            "SELECT page_id FROM page WHERE page_title = ? AND page_namespace = ?",
            (normalize_name(name), NS_CATEGORY),
        ).fetchone()
        return int(row[0]) if row else 0

    def page_by_id(self, page_id: int) -> PageRow | None:
        """Resolve a page id to its namespace and title."""
        row = self.conn.execute(
            "SELECT page_id, page_namespace, page_title FROM page WHERE page_id = ?",
            (page_id,),
        ).fetchone()
        if row is None:
            return None
        return PageRow(page_id=int(row[0]), namespace=int(row[1]), title=str(row[2]))

    def titles_with_prefix(
        self,
        prefix: str,
        *,
        namespaces: Sequence[int],
        limit: int,
        offset: int = 0,
    ) -> list[PageRow]:
        """List pages whose title starts with `prefix`.

        Args:
            prefix: Title prefix, spaces or underscores.
            namespaces: Namespaces to look in; empty means all.
            limit: Maximum number of rows.
            offset: Number of rows to skip.

        Returns:
            Matching rows ordered by title.
        """
        title = normalize_name(prefix)
        if title:
            title = title[0].upper() + title[1:]
        escaped = title.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        params: list[object] = [f"{escaped}%"]
        query = "SELECT page_id, page_namespace, page_title FROM page WHERE page_title LIKE ? ESCAPE '\\'"
        if namespaces:
            placeholders = ",".join("?" for _ in namespaces)
            query += f" AND page_namespace IN ({placeholders})"
            params.extend(namespaces)
        query += " ORDER BY page_namespace, page_title LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        cursor = self.conn.execute(query, params)
        return [PageRow(page_id=int(r[0]), namespace=int(r[1]), title=str(r[2])) for r in cursor]

    def add_page(self, namespace: int, title: str) -> int:
        """Insert a page row (or return the existing one) and return its id."""
        normalized = normalize_name(title)
        self.conn.execute(
            "INSERT OR IGNORE INTO page (page_namespace, page_title) VALUES (?, ?)",
            (namespace, normalized),
        )
        self.conn.commit()
        row = self.conn.execute(
            "SELECT page_id FROM page WHERE page_namespace = ? AND page_title = ?",
            (namespace, normalized),
        ).fetchone()
        return int(row[0])
