"""Tests for wiki search syntax rewriting."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from WikiSearch.core.namespaces import NamespaceTable
from WikiSearch.core.query import Directive, NamespaceRestriction, RestrictionMode, RewriteState
from WikiSearch.query.prefixes import PrefixRegistry
from WikiSearch.query.rewriter import QueryRewriter


class _StubCategories:
    def __init__(self, ids: dict[str, int]) -> None:
        self.ids = ids
        self.lookups: list[str] = []

    def category_id(self, name: str) -> int:
        self.lookups.append(name)
        return self.ids.get(name, 0)


def _make_rewriter(categories: dict[str, int] | None = None) -> tuple[QueryRewriter, _StubCategories]:
    resolver = _StubCategories(categories or {"Physics": 42, "Draft": 7, "Math": 43, "Living_people": 99})
    registry = PrefixRegistry(NamespaceTable(), resolver, search_all_keyword="all")
    return QueryRewriter(registry), resolver


class TestOperatorsAndQuotes(unittest.TestCase):
    def test_plain_query_is_unchanged(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("quantum field theory")
        self.assertEqual(clause, "quantum field theory")
        self.assertTrue(state.namespaces.is_unset)

    def test_boolean_operators_are_translated(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, _ = rewriter.rewrite("foo OR bar AND baz")
        self.assertEqual(clause, "foo | bar & baz")

    def test_lowercase_operators_are_kept(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, _ = rewriter.rewrite("foo or bar and baz")
        self.assertEqual(clause, "foo or bar and baz")

    def test_quoted_text_is_not_rewritten(self) -> None:
        rewriter, resolver = _make_rewriter()
        clause, state = rewriter.rewrite('"incategory:Physics OR Help:foo"')
        self.assertEqual(clause, '"incategory:Physics OR Help:foo"')
        self.assertEqual(state.categories, [])
        self.assertTrue(state.namespaces.is_unset)
        self.assertEqual(resolver.lookups, [])

    def test_text_after_closing_quote_is_rewritten(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite('"foo OR bar" OR Help:baz')
        self.assertEqual(clause, '"foo OR bar" | baz')
        self.assertEqual(state.namespaces.ids, (12,))

    def test_unterminated_quote_protects_the_rest(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, _ = rewriter.rewrite('a OR "b OR c')
        self.assertEqual(clause, 'a | "b OR c')

    def test_leading_tilde_is_stripped_once(self) -> None:
        rewriter, _ = _make_rewriter()
        self.assertEqual(rewriter.rewrite("~foo")[0], "foo")
        self.assertEqual(rewriter.rewrite("~~foo")[0], "~foo")

    def test_blank_query_is_returned_as_is(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("   ")
        self.assertEqual(clause, "   ")
        self.assertEqual(state, RewriteState())


class TestDirectives(unittest.TestCase):
    def test_intitle_directives(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("intitle:Einstein OR intitle:Bohr")
        self.assertEqual(clause, "@page_title Einstein | @page_title Bohr")
        self.assertEqual(state.categories, [])
        self.assertEqual(state.exclude_categories, [])
        self.assertTrue(state.namespaces.is_unset)
        self.assertEqual(state.title_clauses, ["@page_title Einstein", "@page_title Bohr"])

    def test_directive_keywords_ignore_case(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, _ = rewriter.rewrite("INTITLE:Einstein")
        self.assertEqual(clause, "@page_title Einstein")

    def test_incategory_is_consumed(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("incategory:Physics foo")
        self.assertEqual(clause, " foo")
        self.assertEqual(state.categories, [42])
        self.assertEqual(state.exclude_categories, [])

    def test_negated_incategory_excludes(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("-incategory:Draft bar")
        self.assertEqual(clause, " bar")
        self.assertEqual(state.exclude_categories, [7])
        self.assertEqual(state.categories, [])

    def test_several_categories(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("incategory:Physics incategory:Math -incategory:Draft")
        self.assertEqual(clause, "  ")
        self.assertEqual(state.categories, [42, 43])
        self.assertEqual(state.exclude_categories, [7])

    def test_unknown_category_resolves_to_zero(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("incategory:Nowhere foo")
        self.assertEqual(clause, " foo")
        self.assertEqual(state.categories, [0])

    def test_namespace_prefix_restricts_and_is_removed(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("Help:editing")
        self.assertEqual(clause, "editing")
        self.assertEqual(state.namespaces, NamespaceRestriction.only([12]))

    def test_namespace_prefix_ignores_case(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("help:editing")
        self.assertEqual(clause, "editing")
        self.assertEqual(state.namespaces.ids, (12,))

    def test_namespace_alias_and_underscored_name(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("Image:logo User_talk:bob")
        self.assertEqual(clause, "logo bob")
        self.assertEqual(state.namespaces.ids, (6, 3))

    def test_separator_before_directive_is_kept(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("a|Help:b")
        self.assertEqual(clause, "a|b")
        self.assertEqual(state.namespaces.ids, (12,))

    def test_unknown_prefix_is_left_alone(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("Bogus:foo bar")
        self.assertEqual(clause, "Bogus:foo bar")
        self.assertTrue(state.namespaces.is_unset)

    def test_prefix_directive_with_namespace(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("Template:x prefix:Help:Foo")
        self.assertEqual(clause, "x @page_title ^Foo*")
        self.assertEqual(state.namespaces, NamespaceRestriction.only([12]))

    def test_prefix_directive_without_namespace(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("prefix:Foo")
        self.assertEqual(clause, "@page_title ^Foo*")
        self.assertTrue(state.namespaces.is_unset)

    def test_prefix_directive_with_unknown_namespace(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("prefix:Bogus:Foo")
        self.assertEqual(clause, "@page_title ^Foo*")
        self.assertTrue(state.namespaces.is_unset)

    def test_search_all_clears_restriction(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite("Help:foo all:bar")
        self.assertEqual(clause, "foo bar")
        self.assertTrue(state.namespaces.is_all)
        self.assertEqual(state.namespaces.ids, ())

    def test_namespace_after_search_all_restricts_again(self) -> None:
        rewriter, _ = _make_rewriter()
        _, state = rewriter.rewrite("all:foo Help:bar")
        self.assertEqual(state.namespaces.mode, RestrictionMode.RESTRICTED)
        self.assertEqual(state.namespaces.ids, (12,))

    def test_negation_only_matters_for_categories(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, _ = rewriter.rewrite("-intitle:foo")
        self.assertEqual(clause, "@page_title foo")

    def test_directive_inside_later_quotes_is_kept(self) -> None:
        rewriter, _ = _make_rewriter()
        clause, state = rewriter.rewrite('Help:foo "Help:bar"')
        self.assertEqual(clause, 'foo "Help:bar"')
        self.assertEqual(state.namespaces.ids, (12,))


class TestPrefixRegistry(unittest.TestCase):
    def test_candidates_are_unique_and_longest_first(self) -> None:
        registry = PrefixRegistry(NamespaceTable(), _StubCategories({}))
        candidates = registry.candidates()
        lowered = [c.lower() for c in candidates]
        self.assertEqual(len(lowered), len(set(lowered)))
        self.assertIn("intitle", lowered)
        self.assertIn("all", lowered)
        self.assertIn("user_talk", lowered)
        self.assertLess(lowered.index("user_talk"), lowered.index("user"))
        self.assertNotIn("", candidates)

    def test_custom_directive_can_be_registered(self) -> None:
        class _Shout:
            def apply(self, directive: Directive, state: RewriteState) -> str | None:
                return directive.value.upper()

        registry = PrefixRegistry(NamespaceTable(), _StubCategories({}))
        registry.register("shout", _Shout())
        clause, _ = QueryRewriter(registry).rewrite("a shout:hello")
        self.assertEqual(clause, "a HELLO")

    def test_empty_keyword_is_rejected(self) -> None:
        registry = PrefixRegistry(NamespaceTable(), _StubCategories({}))
        with self.assertRaises(ValueError):
            registry.register("  ", object())


if __name__ == "__main__":
    unittest.main()
