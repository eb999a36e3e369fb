"""Client side of the Sphinx/Manticore `searchd` daemon."""

from __future__ import annotations

from WikiSearch.searchd.client import SearchdClient
from WikiSearch.searchd.parser import Match, RawResult, parse_search_response
from WikiSearch.searchd.request import AttributeFilter, MatchMode, SearchRequest, SortMode

__all__ = [
    "AttributeFilter",
    "Match",
    "MatchMode",
    "RawResult",
    "SearchRequest",
    "SearchdClient",
    "SortMode",
    "parse_search_response",
]
