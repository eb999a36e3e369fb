"""Parse index server JSON responses into `RawResult`."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence


@dataclass(frozen=True, slots=True)
class Match:
    """One matched document.

    Attributes:
        doc_id: Document id, which is the page id of the wiki page.
        weight: Relevance weight.
        attributes: Stored attributes returned with the match.
    """

    doc_id: int
    weight: int = 0
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))


@dataclass(frozen=True, slots=True)
class RawResult:
    """Raw index server response for one query.

    Attributes:
        matches: Matches of the requested page, in rank order.
        total_found: Estimated number of matching documents.
        time_ms: Query time reported by the server.
        warning: Server warning text, empty when none.
    """

    matches: Sequence[Match] = ()
    total_found: int = 0
    time_ms: int = 0
    warning: str = ""


def parse_search_response(payload: Mapping[str, Any]) -> RawResult:
    """Parse a `/search` response body.

    Args:
        payload: Decoded JSON object.

    Returns:
        Parsed result. Malformed hits are skipped.
    """
    hits_obj = payload.get("hits")
    hits = hits_obj if isinstance(hits_obj, Mapping) else {}
    items = hits.get("hits")

    matches: list[Match] = []
    if isinstance(items, list):
        for item in items:
            match = _parse_hit(item)
            if match is not None:
                matches.append(match)

    total_found = _as_int(hits.get("total"), default=len(matches))
    return RawResult(
        matches=tuple(matches),
        total_found=total_found,
        time_ms=_as_int(payload.get("took"), default=0),
        warning=_warning_text(payload.get("warning")),
    )


def error_text(payload: Any) -> str:
    """Extract the error message of a failed response body, if any."""
    if not isinstance(payload, Mapping):
        return ""
    error = payload.get("error")
    if isinstance(error, Mapping):
        reason = error.get("reason") or error.get("type")
        return str(reason) if reason else str(dict(error))
    return str(error) if error else ""


def _parse_hit(item: Any) -> Match | None:
    if not isinstance(item, Mapping):
        return None
    doc_id = _as_int(item.get("_id"), default=None)
    if doc_id is None:
        return None
    source = item.get("_source")
    return Match(
        doc_id=doc_id,
        weight=_as_int(item.get("_score"), default=0),
        attributes=source if isinstance(source, Mapping) else {},
    )


def _as_int(value: Any, *, default: int | None) -> int | None:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _warning_text(value: Any) -> str:
    if isinstance(value, Mapping):
        return str(value.get("message") or dict(value))
    return str(value) if value else ""
