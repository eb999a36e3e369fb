"""Tests for escaping of unbalanced index-server meta characters."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from WikiSearch.query.escape import escape_clause, unbalanced_characters


class TestUnbalancedCharacters(unittest.TestCase):
    def test_balanced_clause_marks_nothing(self) -> None:
        self.assertEqual(unbalanced_characters('(a | b) [c] "d e"'), "")

    def test_pairs_are_judged_independently(self) -> None:
        self.assertEqual(unbalanced_characters("(a) [b"), "[]")
        self.assertEqual(unbalanced_characters("(a [b]"), "()")

    def test_odd_quote_count_marks_quote(self) -> None:
        self.assertEqual(unbalanced_characters('foo "bar'), '"')
        self.assertEqual(unbalanced_characters('"a" "b'), '"')


class TestEscapeClause(unittest.TestCase):
    def test_balanced_clause_is_unchanged(self) -> None:
        clause = '(einstein | bohr) [x] "quantum theory"'
        self.assertEqual(escape_clause(clause), clause)

    def test_base_escape_character_is_always_escaped(self) -> None:
        self.assertEqual(escape_clause("AC/DC (band)"), "AC\\/DC (band)")

    def test_odd_quote_is_escaped(self) -> None:
        self.assertEqual(escape_clause('foo "bar'), 'foo \\"bar')

    def test_unbalanced_parentheses_escape_both_sides(self) -> None:
        self.assertEqual(escape_clause("(a) b)"), "\\(a\\) b\\)")

    def test_unbalanced_brackets_leave_parentheses_alone(self) -> None:
        self.assertEqual(escape_clause("(a) [b"), "(a) \\[b")

    def test_already_escaped_delimiters_are_preserved(self) -> None:
        self.assertEqual(escape_clause("foo \\( bar"), "foo \\( bar")
        self.assertEqual(escape_clause('\\"a" b"'), '\\"a" b"')

    def test_already_escaped_delimiters_do_not_count(self) -> None:
        self.assertEqual(escape_clause("(a \\) b"), "\\(a \\) b")

    def test_empty_clause(self) -> None:
        self.assertEqual(escape_clause(""), "")


if __name__ == "__main__":
    unittest.main()
