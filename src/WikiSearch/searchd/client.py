"""HTTP client for the Sphinx/Manticore `searchd` JSON API.

Mirrors the classic setter-style search client API: settings are accumulated
into a `SearchRequest`, and `query()` sends one request per call. Failures do
not raise; `query()` returns None and the reason is kept for
`get_last_error()`.
"""

from __future__ import annotations

from typing import Mapping, Sequence

import requests

from WikiSearch.searchd.parser import RawResult, error_text, parse_search_response
from WikiSearch.searchd.request import AttributeFilter, MatchMode, SearchRequest, SortMode, as_int_tuple
from WikiSearch.utils.log import log

DEFAULT_TIMEOUT = 10.0

HEADERS = {
    "User-Agent": "wiki-search/0.1",
    "Accept": "application/json",
}


class SearchdClient:
    """Low-level HTTP client for one `searchd` daemon."""

    def __init__(
        self,
        *,
        scheme: str = "http",
        timeout: float = DEFAULT_TIMEOUT,
        api_key: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            scheme: URL scheme of the daemon endpoint.
            timeout: Read timeout in seconds.
            api_key: Optional bearer token for a proxy in front of the daemon.
            session: Session to use instead of a new one.
        """
        self._session = session or requests.Session()
        self._scheme = scheme
        self._timeout = timeout
        self._headers = dict(HEADERS)
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"
        self._request = SearchRequest()
        self._last_error = ""
        self._last_warning = ""

    @property
    def request(self) -> SearchRequest:
        """Settings the next `query()` call will use."""
        return self._request

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> SearchdClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def set_server(self, host: str, port: int) -> None:
        self._request.host = host
        self._request.port = int(port)

    def set_field_weights(self, weights: Mapping[str, int]) -> None:
        self._request.field_weights = {str(k): int(v) for k, v in weights.items()}

    def set_index_weights(self, weights: Mapping[str, int]) -> None:
        self._request.index_weights = {str(k): int(v) for k, v in weights.items()}

    def set_match_mode(self, mode: MatchMode | str) -> None:
        self._request.match_mode = MatchMode(mode)

    def set_filter(self, attribute: str, values: Sequence[int], exclude: bool = False) -> None:
        """Add an integer attribute filter.

        Args:
            attribute: Attribute name, e.g. `page_namespace` or `category`.
            values: Accepted (or rejected, when `exclude`) values.
            exclude: Whether matching documents are removed instead of kept.
        """
        if not values:
            raise ValueError(f"Filter on {attribute} needs at least one value")
        self._request.filters.append(AttributeFilter(attribute, as_int_tuple(values), exclude))

    def reset_filters(self) -> None:
        self._request.filters.clear()

    def set_sort_mode(self, mode: SortMode | str, sort_by: str = "") -> None:
        self._request.sort_mode = SortMode(mode)
        self._request.sort_by = sort_by

    def set_limits(self, offset: int, limit: int, max_matches: int = 0, cutoff: int = 0) -> None:
        if offset < 0 or limit <= 0:
            raise ValueError(f"Invalid limits: offset={offset} limit={limit}")
        self._request.offset = offset
        self._request.limit = limit
        if max_matches > 0:
            self._request.max_matches = max_matches
        self._request.cutoff = max(cutoff, 0)

    def get_last_error(self) -> str:
        return self._last_error

    def get_last_warning(self) -> str:
        return self._last_warning

    def query(self, clause: str, index: str = "*") -> RawResult | None:
        """Run one search.

        Args:
            clause: Escaped search clause.
            index: Comma separated index names.

        Returns:
            Parsed result, or None when the daemon could not be reached or
            rejected the query.
        """
        self._last_error = ""
        self._last_warning = ""
        request = self._request
        url = f"{self._scheme}://{request.host}:{request.port}/search"
        payload = request.to_payload(clause, index)
        log.debug("searchd query: url=%s payload=%s", url, payload)

        try:
            resp = self._session.post(url, json=payload, headers=self._headers, timeout=self._timeout)
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
            self._last_error = f"connection to {url} failed: {e}"
            log.warning("searchd unavailable: %s", self._last_error)
            return None

        try:
            body = resp.json()
        except ValueError:
            body = None

        reason = error_text(body)
        if resp.status_code >= 400 or reason or not isinstance(body, dict):
            self._last_error = reason or f"HTTP {resp.status_code}"
            log.warning("searchd rejected query: status=%s error=%s", resp.status_code, self._last_error)
            return None

        result = parse_search_response(body)
        self._last_warning = result.warning
        if result.warning:
            log.debug("searchd warning: %s", result.warning)
        log.debug(
            "searchd response: matches=%d total_found=%d took=%sms",
            len(result.matches),
            result.total_found,
            result.time_ms,
        )
        return result
