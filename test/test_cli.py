"""Tests for the click command line interface."""

from __future__ import annotations

import os
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from WikiSearch.cli.ui import cli
from WikiSearch.storage.db import DatabaseManager
from WikiSearch.storage.pages import PageStore
from WikiSearch.utils.log import log


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._cwd = os.getcwd()
        os.chdir(REPO_ROOT)
        self.tmp = Path(tempfile.mkdtemp())
        self.db_path = self.tmp / "wiki.db"
        self.config_path = self.tmp / "override.yml"
        self.config_path.write_text(
            f"database:\n  path: {self.db_path.as_posix()}\nsearch:\n  prefix_search: false\n",
            encoding="utf-8",
        )

    def tearDown(self) -> None:
        os.chdir(self._cwd)
        log.handlers.clear()

    def test_rewrite_prints_clause_and_filters(self) -> None:
        result = CliRunner().invoke(
            cli,
            ["--config", str(self.config_path), "rewrite", "Help:editing", "OR", '"AC/DC']
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('clause:             editing | "AC/DC', result.output)
        self.assertIn('escaped:            editing | \\"AC\\/DC', result.output)
        self.assertIn("namespaces:         [12] (restricted)", result.output)

    def test_rewrite_search_all(self) -> None:
        result = CliRunner().invoke(cli, ["--config", str(self.config_path), "rewrite", "all:foo"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("namespaces:         all (all)", result.output)

    def test_complete_uses_page_database(self) -> None:
        manager = DatabaseManager(self.db_path)
        try:
            store = PageStore(manager)
            store.add_page(0, "Main Page")
            store.add_page(12, "Main menu")
        finally:
            manager.close()

        result = CliRunner().invoke(
            cli,
            ["--config", str(self.config_path), "complete", "Main", "-n", "0", "-n", "12"],
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Main Page", result.output)
        self.assertIn("Help:Main menu", result.output)

    def test_invalid_config_aborts(self) -> None:
        self.config_path.write_text("searchd:\n  port: 0\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["--config", str(self.config_path), "rewrite", "foo"])
        self.assertNotEqual(result.exit_code, 0)


if __name__ == "__main__":
    unittest.main()
