"""Tests for namespace name resolution."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from WikiSearch.core.namespaces import NamespaceTable
from WikiSearch.core.query import NamespaceRestriction, RestrictionMode


class TestNamespaceTable(unittest.TestCase):
    def test_canonical_names_and_aliases(self) -> None:
        table = NamespaceTable()
        self.assertEqual(table.ns_index("help"), 12)
        self.assertEqual(table.ns_index("User talk"), 3)
        self.assertEqual(table.ns_index("image"), 6)
        self.assertIsNone(table.ns_index("Bogus"))

    def test_localized_names_win(self) -> None:
        table = NamespaceTable(names={0: "", 12: "Hilfe", 14: "Kategorie"})
        self.assertEqual(table.ns_index("Hilfe"), 12)
        self.assertEqual(table.ns_index("Help"), 12)
        self.assertEqual(table.ns_text(12), "Hilfe")
        self.assertEqual(table.ns_text(10), "Template")
        self.assertIn("Kategorie", table.prefix_names())

    def test_prefixed_title(self) -> None:
        table = NamespaceTable()
        self.assertEqual(table.prefixed_title(0, "Main_Page"), "Main Page")
        self.assertEqual(table.prefixed_title(3, "Bob"), "User talk:Bob")

    def test_prefix_names_skip_main_namespace(self) -> None:
        self.assertNotIn("", NamespaceTable().prefix_names())


class TestNamespaceRestriction(unittest.TestCase):
    def test_resolve(self) -> None:
        self.assertEqual(NamespaceRestriction().resolve([0, 4]), (0, 4))
        self.assertEqual(NamespaceRestriction.everything().resolve([0]), ())
        self.assertEqual(NamespaceRestriction.only([12]).resolve([0]), (12,))

    def test_with_namespace_appends_in_order(self) -> None:
        restriction = NamespaceRestriction.everything().with_namespace(12).with_namespace(2)
        self.assertIs(restriction.mode, RestrictionMode.RESTRICTED)
        self.assertEqual(restriction.ids, (12, 2))


if __name__ == "__main__":
    unittest.main()
