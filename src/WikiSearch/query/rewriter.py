"""Wiki search syntax rewriter.

Turns the query typed by a user into an index-server clause:

- `~` at the start (the "no near-term search" marker) is dropped.
- Quoted spans are copied verbatim.
- Outside quotes, `prefix:value` directives are dispatched through the
  `PrefixRegistry` and replaced by their clause text.
- Outside quotes, ` OR ` and ` AND ` become ` | ` and ` & `.

Filters requested by directives (namespaces, categories) are collected in a
`RewriteState` returned alongside the clause.
"""

from __future__ import annotations

import re
from enum import Enum

from WikiSearch.core.query import Directive, RewriteState
from WikiSearch.query.prefixes import PrefixRegistry
from WikiSearch.utils.log import log

_QUOTE = '"'
_QUOTE_SPLIT_RE = re.compile(r'(")')
_OPERATORS = ((" OR ", " | "), (" AND ", " & "))


class _Scan(Enum):
    OUTSIDE = "outside"
    INSIDE_QUOTES = "inside_quotes"


class QueryRewriter:
    """Rewrites raw wiki queries using a prefix registry."""

    def __init__(self, registry: PrefixRegistry) -> None:
        self.registry = registry

    def rewrite(self, query: str) -> tuple[str, RewriteState]:
        """Rewrite a raw query.

        Args:
            query: Query as typed by the user.

        Returns:
            Tuple of (rewritten clause, filter state).
        """
        state = RewriteState()
        if query.strip() == "":
            return query, state

        if query.startswith("~"):
            query = query[1:]

        scan = _Scan.OUTSIDE
        rewritten: list[str] = []
        for part in _QUOTE_SPLIT_RE.split(query):
            if part == _QUOTE:
                rewritten.append(part)
                scan = _Scan.INSIDE_QUOTES if scan is _Scan.OUTSIDE else _Scan.OUTSIDE
            elif scan is _Scan.INSIDE_QUOTES:
                rewritten.append(part)
            else:
                rewritten.append(self._rewrite_unquoted(part, state))

        clause = "".join(rewritten)
        log.debug("Rewrote query %r -> %r", query, clause)
        return clause, state

    def _rewrite_unquoted(self, part: str, state: RewriteState) -> str:
        if ":" in part:
            part = self.registry.pattern().sub(lambda match: self._replace_directive(match, state), part)
        for operator, replacement in _OPERATORS:
            part = part.replace(operator, replacement)
        return part

    def _replace_directive(self, match: re.Match[str], state: RewriteState) -> str:
        lead, prefix, value = match.group(1), match.group(2), match.group(3)
        negated = lead == "-"
        directive = Directive(
            separator="" if negated else lead,
            negated=negated,
            prefix=prefix,
            value=value,
            text=match.group(0),
        )
        replacement = self.registry.handler_for(prefix).apply(directive, state)
        if replacement is None:
            return directive.text
        return directive.separator + replacement
