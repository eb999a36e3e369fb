"""Directive handlers and the prefix registry.

A directive is a `prefix:value` token in the raw query. The registry maps each
recognized prefix keyword to a handler; any other candidate prefix is treated
as a namespace name. Handlers mutate the `RewriteState` of the running query
and return the text that replaces the directive, or None to leave the
directive untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from WikiSearch.core.namespaces import NamespaceTable, normalize_name
from WikiSearch.core.query import Directive, RewriteState
from WikiSearch.utils.log import log

TITLE_FIELD = "@page_title"


class CategoryResolver(Protocol):
    """Resolves a category page name to its page id."""

    def category_id(self, name: str) -> int:
        """Return the page id of the category, or 0 when it does not exist."""
        raise NotImplementedError


class DirectiveHandler(Protocol):
    """Applies one directive to the rewrite state."""

    def apply(self, directive: Directive, state: RewriteState) -> str | None:
        """Return the replacement text, or None to keep the directive as typed."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class TitleFilter:
    """`intitle:word` searches the title field only."""

    def apply(self, directive: Directive, state: RewriteState) -> str | None:
        clause = f"{TITLE_FIELD} {directive.value}"
        state.title_clauses.append(clause)
        return clause


@dataclass(frozen=True, slots=True)
class CategoryFilter:
    """`incategory:Name` (or `-incategory:Name`) filters on category membership.

    A category that does not exist resolves to id 0. The id is still added to
    the filter, so such a query matches no regular page.
    """

    resolver: CategoryResolver

    def apply(self, directive: Directive, state: RewriteState) -> str | None:
        category = int(self.resolver.category_id(normalize_name(directive.value)) or 0)
        if category == 0:
            log.debug("Category not found, filtering on id 0: %s", directive.value)
        if directive.negated:
            state.exclude_categories.append(category)
        else:
            state.categories.append(category)
        return ""


@dataclass(frozen=True, slots=True)
class PrefixFilter:
    """`prefix:[Namespace:]Start` matches titles starting with `Start`."""

    namespaces: NamespaceTable

    def apply(self, directive: Directive, state: RewriteState) -> str | None:
        prefix = directive.value
        if ":" in prefix:
            ns_name, prefix = prefix.split(":", 1)
            namespace = self.namespaces.ns_index(ns_name)
            if namespace is not None:
                state.restrict_to(namespace)
            else:
                log.debug("Unknown namespace in prefix directive: %s", ns_name)
        return f"{TITLE_FIELD} ^{prefix}*"


@dataclass(frozen=True, slots=True)
class SearchAllFilter:
    """The localized "search all" keyword lifts the namespace restriction."""

    def apply(self, directive: Directive, state: RewriteState) -> str | None:
        state.search_all()
        return directive.value


@dataclass(frozen=True, slots=True)
class NamespaceFilter:
    """`Namespace:word` adds the namespace to the restriction."""

    namespaces: NamespaceTable

    def apply(self, directive: Directive, state: RewriteState) -> str | None:
        namespace = self.namespaces.ns_index(directive.prefix)
        if namespace is None:
            log.debug("Unresolvable directive left as text: %s", directive.text)
            return None
        state.add_namespace(namespace)
        return directive.value


class PrefixRegistry:
    """Registry of directive keywords and the namespace prefix fallback."""

    def __init__(
        self,
        namespaces: NamespaceTable,
        categories: CategoryResolver,
        *,
        search_all_keyword: str = "all",
    ) -> None:
        self._namespaces = namespaces
        self._handlers: dict[str, DirectiveHandler] = {
            "intitle": TitleFilter(),
            "incategory": CategoryFilter(categories),
            "prefix": PrefixFilter(namespaces),
        }
        if search_all_keyword.strip():
            self._handlers[normalize_name(search_all_keyword).lower()] = SearchAllFilter()
        self._fallback: DirectiveHandler = NamespaceFilter(namespaces)
        self._pattern: re.Pattern[str] | None = None

    def register(self, keyword: str, handler: DirectiveHandler) -> None:
        """Register an additional directive keyword."""
        key = normalize_name(keyword).lower()
        if not key:
            raise ValueError("Directive keyword must not be empty")
        self._handlers[key] = handler
        self._pattern = None

    def handler_for(self, prefix: str) -> DirectiveHandler:
        """Return the handler for a prefix token; namespace names fall back."""
        return self._handlers.get(normalize_name(prefix).lower(), self._fallback)

    def candidates(self) -> list[str]:
        """Unique candidate prefixes, longest first."""
        seen: set[str] = set()
        out: list[str] = []
        for name in [*self._namespaces.prefix_names(), *self._handlers.keys()]:
            prefix = normalize_name(name)
            if not prefix or prefix.lower() in seen:
                continue
            seen.add(prefix.lower())
            out.append(prefix)
        return sorted(out, key=len, reverse=True)

    def pattern(self) -> re.Pattern[str]:
        """Compiled directive pattern: (separator)(prefix):(value)."""
        if self._pattern is None:
            alternatives = "|".join(re.escape(prefix) for prefix in self.candidates())
            self._pattern = re.compile(rf"(^|[| :]|-)({alternatives}):([^ ]+)", re.IGNORECASE)
        return self._pattern
