"""Command implementations for the WikiSearch CLI.

Each command wraps one engine operation and prints its outcome; CLI
parameter handling lives in `ui`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

import click

from WikiSearch.core.models import PageRecord
from WikiSearch.query.escape import escape_clause
from WikiSearch.services.results import ResultSet
from WikiSearch.services.search import SearchEngine
from WikiSearch.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Run a full text or title search and print the hits."""

    engine: SearchEngine
    titles_only: bool = False
    as_json: bool = False

    def execute(self, term: str) -> None:
        if self.titles_only:
            results = self.engine.search_title(term)
        else:
            results = self.engine.search_text(term)

        if results is None:
            log.info("No results for %r", term)
            return
        if not results.is_ok:
            log.warning("Index server error: %s", results.error or "unknown")

        records = list(results)
        log.info("Fetched %d of about %d results", len(records), results.total_hits)
        if self.as_json:
            click.echo(json.dumps(_results_payload(results, records), ensure_ascii=False, indent=2))
            return
        for rank, record in enumerate(records, start=self.engine.offset + 1):
            click.echo(f"{rank:>4}. {record.prefixed_title}  (score={record.score})")


@dataclass(slots=True)
class RewriteCommand:
    """Print the clause and filters a query translates to, without searching."""

    engine: SearchEngine

    def execute(self, term: str) -> None:
        clause, state = self.engine.rewrite(term)
        namespaces = state.namespaces.resolve(self.engine.namespaces)
        click.echo(f"clause:             {clause}")
        click.echo(f"escaped:            {escape_clause(clause)}")
        click.echo(f"namespaces:         {list(namespaces) if namespaces else 'all'} ({state.namespaces.mode.value})")
        click.echo(f"categories:         {state.categories}")
        click.echo(f"exclude categories: {state.exclude_categories}")


@dataclass(slots=True)
class CompleteCommand:
    """Print title completions for a prefix."""

    engine: SearchEngine

    def execute(self, prefix: str) -> None:
        titles = self.engine.complete(prefix)
        log.debug("Completion for %r returned %d titles", prefix, len(titles))
        for title in titles:
            click.echo(title)


def _results_payload(results: ResultSet, records: list[PageRecord]) -> dict:
    return {
        "term": results.search_term,
        "total_hits": results.total_hits,
        "num_rows": results.num_rows,
        "returned_rows": results.returned_rows,
        "error": results.error,
        "warning": results.warning,
        "results": [
            {
                "page_id": record.page_id,
                "namespace": record.namespace,
                "title": record.prefixed_title,
                "score": record.score,
            }
            for record in records
        ],
    }
