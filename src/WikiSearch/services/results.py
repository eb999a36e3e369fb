"""Result set over one index server response."""

from __future__ import annotations

import re
from typing import Iterator, Protocol

from WikiSearch.core.models import PageRecord
from WikiSearch.core.namespaces import NamespaceTable
from WikiSearch.query.highlight import regex_term
from WikiSearch.searchd.parser import RawResult
from WikiSearch.storage.pages import PageRow
from WikiSearch.utils.log import log

_TERM_SPLIT_RE = re.compile(r"\s+")
_OPERATOR_TOKENS = {"|", "&", "OR", "AND", "-"}


class PageLookup(Protocol):
    """Resolves index document ids to pages."""

    def page_by_id(self, page_id: int) -> PageRow | None:
        """Return the page row for an id, or None when the page is gone."""
        raise NotImplementedError


class ResultSet:
    """Sequence of page records for one query, read front to back.

    Matches are resolved through the page lookup on first access. Matches
    whose page no longer exists are skipped and do not count as rows. The set
    can be traversed once.
    """

    def __init__(
        self,
        raw: RawResult | None,
        term: str,
        pages: PageLookup,
        namespaces: NamespaceTable,
        *,
        error: str = "",
        warning: str = "",
        word_breaks: bool = True,
    ) -> None:
        self._raw = raw
        self._pages = pages
        self._namespaces = namespaces
        self._word_breaks = word_breaks
        self._records: list[PageRecord] | None = None
        self._position = 0
        self.search_term = term
        self.error = error
        self.warning = warning

    @property
    def is_ok(self) -> bool:
        """False when the index server failed and this set is a suggest-mode placeholder."""
        return self._raw is not None

    @property
    def total_hits(self) -> int:
        """Estimated number of matches reported by the index server."""
        return self._raw.total_found if self._raw is not None else 0

    @property
    def num_rows(self) -> int:
        """Number of page records in this batch."""
        return len(self._resolve())

    @property
    def returned_rows(self) -> int:
        """Number of matches the index server returned, resolvable or not."""
        return len(self._raw.matches) if self._raw is not None else 0

    def next(self) -> PageRecord | None:
        """Return the next page record, or None when exhausted."""
        records = self._resolve()
        if self._position >= len(records):
            return None
        record = records[self._position]
        self._position += 1
        return record

    def __iter__(self) -> Iterator[PageRecord]:
        return self

    def __next__(self) -> PageRecord:
        record = self.next()
        if record is None:
            raise StopIteration
        return record

    def _resolve(self) -> list[PageRecord]:
        if self._records is None:
            self._records = []
            for match in self._raw.matches if self._raw is not None else ():
                row = self._pages.page_by_id(match.doc_id)
                if row is None:
                    log.debug("Indexed page %d not found in database, skipping", match.doc_id)
                    continue
                self._records.append(
                    PageRecord(
                        page_id=row.page_id,
                        namespace=row.namespace,
                        title=row.title,
                        prefixed_title=self._namespaces.prefixed_title(row.namespace, row.title),
                        score=match.weight,
                        attributes=match.attributes,
                    )
                )
        return self._records

    def term_matches(self) -> list[str]:
        """Regexes that highlight the search words in result text."""
        regexes: list[str] = []
        for token in _TERM_SPLIT_RE.split(self.search_term.replace('"', " ")):
            if not token or token in _OPERATOR_TOKENS or token.startswith("-") or ":" in token:
                continue
            wildcard = token.endswith("*")
            word = token.rstrip("*")
            if word:
                regexes.append(regex_term(word, wildcard, word_breaks=self._word_breaks))
        return regexes
