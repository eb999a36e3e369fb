"""Extension points around query execution.

Two hooks are run for every search:

- `before_results` receives a `FilterContext` before filters are applied and
  may rewrite the term, the offset, the namespaces or the category lists.
  When the query named no namespace, `namespaces` already holds the engine's
  default namespaces.
- `before_query` receives a `QueryContext` with the configured client right
  before the query is sent, and may adjust either.

A handler that returns False vetoes the search: remaining handlers are skipped
and the engine returns no result set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from WikiSearch.core.query import NamespaceRestriction
from WikiSearch.utils.log import log

if TYPE_CHECKING:
    from WikiSearch.services.search import IndexClient

BEFORE_RESULTS = "before_results"
BEFORE_QUERY = "before_query"

HookHandler = Callable[[Any], "bool | None"]


@dataclass(slots=True)
class FilterContext:
    """Mutable search inputs handed to `before_results` handlers."""

    term: str
    offset: int
    namespaces: NamespaceRestriction
    categories: list[int] = field(default_factory=list)
    exclude_categories: list[int] = field(default_factory=list)


@dataclass(slots=True)
class QueryContext:
    """Search term and configured client handed to `before_query` handlers."""

    term: str
    client: IndexClient


class HookRegistry:
    """Named hook handlers, run in registration order."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[HookHandler]] = {
            BEFORE_RESULTS: [],
            BEFORE_QUERY: [],
        }

    def register(self, name: str, handler: HookHandler) -> None:
        """Register a handler for a hook.

        Raises:
            ValueError: If the hook name is unknown.
        """
        if name not in self._handlers:
            raise ValueError(f"Unknown hook: {name}")
        self._handlers[name].append(handler)

    def run(self, name: str, context: Any) -> bool:
        """Run all handlers of a hook.

        Returns:
            False when a handler vetoed, True otherwise.
        """
        for handler in self._handlers.get(name, ()):
            if handler(context) is False:
                log.debug("Hook %s vetoed by %s", name, getattr(handler, "__name__", repr(handler)))
                return False
        return True
