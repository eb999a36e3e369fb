"""Search request model for the index server.

`SearchRequest` collects everything the setter-style client API configures
(server, weights, filters, sort, limits) and compiles it, together with a
clause, into a JSON `/search` body understood by Sphinx/Manticore `searchd`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence


class MatchMode(str, Enum):
    """How the clause is matched against the full-text fields."""

    ALL = "all"
    ANY = "any"
    PHRASE = "phrase"
    BOOLEAN = "boolean"
    EXTENDED = "extended"


class SortMode(str, Enum):
    """How matches are ordered."""

    RELEVANCE = "relevance"
    ATTR_DESC = "attr_desc"
    ATTR_ASC = "attr_asc"
    TIME_SEGMENTS = "time_segments"
    EXTENDED = "extended"
    EXPR = "expr"


_RELEVANCE_KEYS = {"@weight", "@relevance", "@rank", "weight()"}
_SORT_EXPR_NAME = "sort_expr"


@dataclass(frozen=True, slots=True)
class AttributeFilter:
    """Integer attribute filter (`attribute IN values`, or NOT IN when excluded)."""

    attribute: str
    values: tuple[int, ...]
    exclude: bool = False


@dataclass(slots=True)
class SearchRequest:
    """Server-bound query settings."""

    host: str = "localhost"
    port: int = 9308
    field_weights: dict[str, int] = field(default_factory=dict)
    index_weights: dict[str, int] = field(default_factory=dict)
    match_mode: MatchMode = MatchMode.EXTENDED
    filters: list[AttributeFilter] = field(default_factory=list)
    sort_mode: SortMode = SortMode.RELEVANCE
    sort_by: str = ""
    offset: int = 0
    limit: int = 20
    max_matches: int = 1000
    cutoff: int = 0

    def to_payload(self, clause: str, index: str) -> dict[str, Any]:
        """Compile the request and a clause into a JSON search body.

        Args:
            clause: Escaped search clause.
            index: Comma separated index names.

        Returns:
            JSON-serializable mapping.
        """
        must: list[dict[str, Any]] = [self._match_clause(clause)]
        must_not: list[dict[str, Any]] = []
        for attr_filter in self.filters:
            condition = {"in": {attr_filter.attribute: list(attr_filter.values)}}
            (must_not if attr_filter.exclude else must).append(condition)

        bool_query: dict[str, Any] = {"must": must}
        if must_not:
            bool_query["must_not"] = must_not

        payload: dict[str, Any] = {
            "index": index,
            "query": {"bool": bool_query},
            "offset": self.offset,
            "limit": self.limit,
        }
        if self.max_matches > 0:
            payload["max_matches"] = self.max_matches

        options: dict[str, Any] = {}
        if self.cutoff > 0:
            options["cutoff"] = self.cutoff
        if self.field_weights:
            options["field_weights"] = dict(self.field_weights)
        if self.index_weights:
            options["index_weights"] = dict(self.index_weights)
        if options:
            payload["options"] = options

        sort = self._sort_clause()
        if sort:
            payload["sort"] = sort
        if self.sort_mode is SortMode.EXPR and self.sort_by:
            payload["expressions"] = {_SORT_EXPR_NAME: self.sort_by}
        return payload

    def _match_clause(self, clause: str) -> dict[str, Any]:
        if self.match_mode is MatchMode.PHRASE:
            return {"match_phrase": {"*": clause}}
        if self.match_mode in (MatchMode.ALL, MatchMode.ANY):
            operator = "and" if self.match_mode is MatchMode.ALL else "or"
            return {"match": {"*": {"query": clause, "operator": operator}}}
        return {"query_string": clause}

    def _sort_clause(self) -> list[Any]:
        attribute = self.sort_by.strip()
        if self.sort_mode is SortMode.RELEVANCE:
            return []
        if self.sort_mode is SortMode.EXPR:
            return [{_SORT_EXPR_NAME: "desc"}] if attribute else []
        if self.sort_mode is SortMode.EXTENDED:
            return _parse_extended_sort(attribute)
        if not attribute:
            return []
        if self.sort_mode is SortMode.ATTR_ASC:
            return [{attribute: "asc"}]
        if self.sort_mode is SortMode.TIME_SEGMENTS:
            return [{attribute: "desc"}, {"_score": "desc"}]
        return [{attribute: "desc"}]


def _parse_extended_sort(sort_by: str) -> list[Any]:
    """Parse `attr DESC, @weight ASC` style sort clauses."""
    out: list[Any] = []
    for item in sort_by.split(","):
        tokens = item.split()
        if not tokens:
            continue
        name = tokens[0]
        order = tokens[1].lower() if len(tokens) > 1 else "asc"
        if order not in ("asc", "desc"):
            raise ValueError(f"Invalid sort order in sort clause: {item.strip()}")
        if name.lower() in _RELEVANCE_KEYS:
            name = "_score"
        out.append({name: order})
    return out


def as_int_tuple(values: Sequence[int]) -> tuple[int, ...]:
    return tuple(int(value) for value in values)
