"""Search engine service: query rewriting, execution and result wrapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping, Protocol, Sequence

from WikiSearch.config.search import SearchConfig
from WikiSearch.config.searchd import SearchdConfig
from WikiSearch.core.namespaces import NS_SPECIAL, NamespaceTable
from WikiSearch.core.query import NamespaceRestriction, RewriteState
from WikiSearch.query.escape import escape_clause
from WikiSearch.query.prefixes import PrefixRegistry
from WikiSearch.query.rewriter import QueryRewriter
from WikiSearch.searchd.parser import RawResult
from WikiSearch.searchd.request import MatchMode, SortMode
from WikiSearch.services.hooks import BEFORE_QUERY, BEFORE_RESULTS, FilterContext, HookRegistry, QueryContext
from WikiSearch.services.results import ResultSet
from WikiSearch.storage.pages import PageRow
from WikiSearch.utils.log import log

NAMESPACE_ATTR = "page_namespace"
CATEGORY_ATTR = "category"


class IndexClient(Protocol):
    """Protocol for an index server client."""

    def set_server(self, host: str, port: int) -> None: ...

    def set_field_weights(self, weights: Mapping[str, int]) -> None: ...

    def set_index_weights(self, weights: Mapping[str, int]) -> None: ...

    def set_match_mode(self, mode: MatchMode | str) -> None: ...

    def set_filter(self, attribute: str, values: Sequence[int], exclude: bool = False) -> None: ...

    def set_sort_mode(self, mode: SortMode | str, sort_by: str = "") -> None: ...

    def set_limits(self, offset: int, limit: int, max_matches: int = 0, cutoff: int = 0) -> None: ...

    def query(self, clause: str, index: str = "*") -> RawResult | None:
        """Run the query; None signals a failed or rejected request."""
        raise NotImplementedError

    def get_last_error(self) -> str: ...

    def get_last_warning(self) -> str: ...

    def close(self) -> None: ...


class PageDatabase(Protocol):
    """Page table lookups the engine depends on."""

    def category_id(self, name: str) -> int: ...

    def page_by_id(self, page_id: int) -> PageRow | None: ...

    def titles_with_prefix(
        self,
        prefix: str,
        *,
        namespaces: Sequence[int],
        limit: int,
        offset: int = 0,
    ) -> list[PageRow]: ...


@dataclass(slots=True)
class SearchEngine:
    """Wiki search backend on top of an index server.

    Attributes:
        client_factory: Creates one index client per query.
        pages: Page database used for category and result lookups.
        searchd: Index server settings.
        settings: Engine behavior settings.
        namespace_table: Namespace names of the content language.
        search_all_keyword: Localized "search all" prefix keyword.
        word_breaks: Whether the content language separates words with spaces.
        hooks: Extension points run around each query.
    """

    client_factory: Callable[[], IndexClient]
    pages: PageDatabase
    searchd: SearchdConfig
    settings: SearchConfig = field(default_factory=SearchConfig)
    namespace_table: NamespaceTable = field(default_factory=NamespaceTable)
    search_all_keyword: str = "all"
    word_breaks: bool = True
    hooks: HookRegistry = field(default_factory=HookRegistry)
    limit: int = 0
    offset: int = 0
    namespaces: list[int] = field(default_factory=list)
    _rewriter: QueryRewriter | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.limit <= 0:
            self.limit = self.settings.limit
        if not self.namespaces:
            self.namespaces = list(self.settings.default_namespaces)

    @property
    def rewriter(self) -> QueryRewriter:
        if self._rewriter is None:
            registry = PrefixRegistry(
                self.namespace_table,
                self.pages,
                search_all_keyword=self.search_all_keyword,
            )
            self._rewriter = QueryRewriter(registry)
        return self._rewriter

    def set_limit_offset(self, limit: int, offset: int = 0) -> None:
        if limit <= 0 or offset < 0:
            raise ValueError(f"Invalid limit/offset: limit={limit} offset={offset}")
        self.limit = limit
        self.offset = offset

    def set_namespaces(self, namespaces: Sequence[int]) -> None:
        """Set the namespaces searched when the query names none."""
        self.namespaces = [int(ns) for ns in namespaces]

    def rewrite(self, term: str) -> tuple[str, RewriteState]:
        """Rewrite wiki search syntax into an index server clause."""
        return self.rewriter.rewrite(term)

    def search_text(self, term: str, *, offset: int | None = None, limit: int | None = None) -> ResultSet | None:
        """Full text search for a raw user query.

        Args:
            term: Query as typed by the user, directives included.
            offset: Number of matches to skip; the engine offset when None.
            limit: Matches per page; the engine limit when None.

        Returns:
            Result set, or None for blank terms and failed queries.
        """
        clause, state = self.rewrite(term)
        return self.execute(term, clause, state, offset=offset, limit=limit)

    def search_title(self, term: str) -> ResultSet | None:
        """Search page titles starting with (or containing) `term`."""
        return self.execute(term, self.title_clause(term), RewriteState())

    def title_clause(self, term: str) -> str:
        """Title-only clause; infix search matches anywhere in the title."""
        anchor = "*" if self.settings.infix_search else "^"
        return f"@page_title: {anchor}{term}*"

    def complete(self, search: str) -> list[str]:
        """Title completion for a search box.

        Goes through the index server when prefix search is enabled, otherwise
        (or when only special pages are searched) through the page database.

        Returns:
            Display titles with namespace prefix.
        """
        if self.namespaces == [NS_SPECIAL] or not self.settings.prefix_search:
            rows = self.pages.titles_with_prefix(
                search,
                namespaces=self.namespaces,
                limit=self.limit,
                offset=self.offset,
            )
            return [self.namespace_table.prefixed_title(row.namespace, row.title) for row in rows]

        result_set = self.search_title(search)
        if result_set is None:
            return []
        return [record.prefixed_title for record in result_set]

    def execute(
        self,
        term: str,
        search_clause: str,
        state: RewriteState,
        *,
        offset: int | None = None,
        limit: int | None = None,
    ) -> ResultSet | None:
        """Run one query against the index server.

        Args:
            term: Raw search term, used for hooks, logging and highlighting.
            search_clause: Clause to send, before escaping.
            state: Filters collected while rewriting the term.
            offset: Number of matches to skip; the engine offset when None.
            limit: Matches per page; the engine limit when None.

        Returns:
            Result set; None when the term is blank, a hook vetoed the search,
            or the index server failed and suggest mode is off.
        """
        log.debug("Running search for %r, clause: %r", term, search_clause)
        if term.strip() == "":
            log.debug("Blank search term, skipping index server")
            return None

        offset = self.offset if offset is None else offset
        limit = self.limit if limit is None else limit
        if limit <= 0 or offset < 0:
            raise ValueError(f"Invalid limit/offset: limit={limit} offset={offset}")

        namespaces = state.namespaces
        if namespaces.is_unset:
            namespaces = NamespaceRestriction.only(self.namespaces)
        context = FilterContext(
            term=term,
            offset=offset,
            namespaces=namespaces,
            categories=list(state.categories),
            exclude_categories=list(state.exclude_categories),
        )
        if not self.hooks.run(BEFORE_RESULTS, context):
            return None

        client = self.client_factory()
        try:
            self._configure_client(client, context, limit)

            query_context = QueryContext(term=context.term, client=client)
            if not self.hooks.run(BEFORE_QUERY, query_context):
                return None

            raw = client.query(escape_clause(search_clause), self.searchd.index_list)
            error = client.get_last_error()
            warning = client.get_last_warning()
        finally:
            client.close()

        if raw is None:
            log.debug("Index server returned no result: %s", error or "unknown error")
            if not self.settings.suggest_mode:
                return None

        return ResultSet(
            raw,
            query_context.term,
            self.pages,
            self.namespace_table,
            error=error,
            warning=warning,
            word_breaks=self.word_breaks,
        )

    def _configure_client(self, client: IndexClient, context: FilterContext, limit: int) -> None:
        searchd = self.searchd
        client.set_server(searchd.host, searchd.port)
        if searchd.field_weights:
            client.set_field_weights(searchd.field_weights)
        if searchd.index_weights:
            client.set_index_weights(searchd.index_weights)
        client.set_match_mode(searchd.match_mode)

        namespaces = context.namespaces.resolve(self.namespaces)
        if namespaces:
            client.set_filter(NAMESPACE_ATTR, namespaces)
        if context.categories:
            client.set_filter(CATEGORY_ATTR, context.categories)
            log.debug("Included categories: %s", ", ".join(str(c) for c in context.categories))
        if context.exclude_categories:
            client.set_filter(CATEGORY_ATTR, context.exclude_categories, exclude=True)
            log.debug("Excluded categories: %s", ", ".join(str(c) for c in context.exclude_categories))

        client.set_sort_mode(searchd.sort_mode, searchd.sort_by)
        client.set_limits(context.offset, limit, searchd.max_matches, searchd.cutoff)
