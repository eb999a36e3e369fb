"""Search service layer for WikiSearch.

Provides the search engine, its extension points, and the factory that wires
them from configuration.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from WikiSearch.services.hooks import BEFORE_QUERY, BEFORE_RESULTS, FilterContext, HookRegistry, QueryContext
from WikiSearch.services.results import ResultSet
from WikiSearch.services.search import IndexClient, PageDatabase, SearchEngine
from WikiSearch.utils.log import log

if TYPE_CHECKING:
    from WikiSearch.config import AppConfig


def create_search_engine(
    config: AppConfig,
    pages: PageDatabase,
    hooks: HookRegistry | None = None,
) -> SearchEngine:
    """Create a search engine backed by the configured searchd daemon.

    Args:
        config: Application configuration.
        pages: Page database for category and result lookups.
        hooks: Optional pre-populated hook registry.

    Returns:
        Configured SearchEngine instance.

    Raises:
        ValueError: If `searchd.api_key_env` names a variable that is not set.
    """
    from WikiSearch.searchd.client import SearchdClient

    searchd = config.searchd
    api_key = None
    if searchd.api_key_env:
        api_key = os.getenv(searchd.api_key_env)
        if not api_key:
            raise ValueError(
                f"searchd.api_key_env is set but {searchd.api_key_env} environment variable is not set. "
                f"Set it in your .env file or shell environment."
            )

    def client_factory() -> IndexClient:
        return SearchdClient(scheme=searchd.scheme, timeout=searchd.timeout, api_key=api_key)

    engine = SearchEngine(
        client_factory=client_factory,
        pages=pages,
        searchd=searchd,
        settings=config.search,
        namespace_table=config.wiki.namespace_table(),
        search_all_keyword=config.wiki.search_all_keyword,
        word_breaks=config.wiki.word_breaks,
        hooks=hooks or HookRegistry(),
    )
    log.debug(
        "Search engine created: searchd=%s://%s:%d indexes=%s",
        searchd.scheme,
        searchd.host,
        searchd.port,
        searchd.index_list,
    )
    return engine


__all__ = [
    "BEFORE_QUERY",
    "BEFORE_RESULTS",
    "FilterContext",
    "HookRegistry",
    "IndexClient",
    "PageDatabase",
    "QueryContext",
    "ResultSet",
    "SearchEngine",
    "create_search_engine",
]
