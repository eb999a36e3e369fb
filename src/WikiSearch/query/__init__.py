"""Wiki query syntax translation for the index server."""

from __future__ import annotations

from WikiSearch.query.escape import escape_clause
from WikiSearch.query.highlight import regex_term
from WikiSearch.query.prefixes import CategoryResolver, DirectiveHandler, PrefixRegistry
from WikiSearch.query.rewriter import QueryRewriter

__all__ = [
    "CategoryResolver",
    "DirectiveHandler",
    "PrefixRegistry",
    "QueryRewriter",
    "escape_clause",
    "regex_term",
]
