"""Tests for SQLite page lookups."""

from __future__ import annotations

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from WikiSearch.storage.db import DatabaseManager
from WikiSearch.storage.pages import PageRow, PageStore


class TestPageStore(unittest.TestCase):
    def setUp(self) -> None:
        self.manager = DatabaseManager(Path(tempfile.mkdtemp()) / "wiki.db")
        self.store = PageStore(self.manager)
        self.main_page = self.store.add_page(0, "Main Page")
        self.mainxpage = self.store.add_page(0, "Mainxpage")
        self.physics = self.store.add_page(14, "Quantum physics")
        self.help_page = self.store.add_page(12, "Main_menu")

    def tearDown(self) -> None:
        self.manager.close()

    def test_add_page_is_idempotent(self) -> None:
        self.assertEqual(self.store.add_page(0, "Main_Page"), self.main_page)

    def test_category_id(self) -> None:
        self.assertEqual(self.store.category_id("Quantum physics"), self.physics)
        self.assertEqual(self.store.category_id("Quantum_physics"), self.physics)
        self.assertEqual(self.store.category_id("Missing"), 0)

    def test_category_id_ignores_other_namespaces(self) -> None:
        self.assertEqual(self.store.category_id("Main Page"), 0)

    def test_page_by_id(self) -> None:
        self.assertEqual(
            self.store.page_by_id(self.help_page),
            PageRow(page_id=self.help_page, namespace=12, title="Main_menu"),
        )
        self.assertIsNone(self.store.page_by_id(999))

    def test_titles_with_prefix_treats_underscore_literally(self) -> None:
        rows = self.store.titles_with_prefix("main p", namespaces=[0], limit=10)
        self.assertEqual([row.title for row in rows], ["Main_Page"])

    def test_titles_with_prefix_across_namespaces(self) -> None:
        rows = self.store.titles_with_prefix("Main", namespaces=[], limit=10)
        self.assertEqual(
            [(row.namespace, row.title) for row in rows],
            [(0, "Main_Page"), (0, "Mainxpage"), (12, "Main_menu")],
        )

    def test_titles_with_prefix_paging(self) -> None:
        rows = self.store.titles_with_prefix("Main", namespaces=[0, 12], limit=1, offset=1)
        self.assertEqual([row.title for row in rows], ["Mainxpage"])


class TestDatabaseManager(unittest.TestCase):
    def test_singleton_until_closed(self) -> None:
        first = DatabaseManager(Path(":memory:"))
        try:
            self.assertIs(DatabaseManager(Path(":memory:")), first)
        finally:
            first.close()
        second = DatabaseManager(Path(":memory:"))
        try:
            self.assertIsNot(second, first)
        finally:
            second.close()


if __name__ == "__main__":
    unittest.main()
