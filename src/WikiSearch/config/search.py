"""Search behavior configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from WikiSearch.config.common import (
    expect_bool,
    expect_int,
    expect_int_list,
    get_optional_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated engine behavior settings.

    Attributes:
        limit: Results per page.
        default_namespaces: Namespaces searched when the query names none.
        infix_search: Title search matches anywhere in the title, not only
            at the start.
        prefix_search: Title completion goes through the index server
            instead of the page database.
        suggest_mode: Return an empty result set instead of None when the
            index server fails, so callers can still offer suggestions.
    """

    limit: int = 20
    default_namespaces: tuple[int, ...] = (0,)
    infix_search: bool = False
    prefix_search: bool = True
    suggest_mode: bool = False


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the `search` section; every key is optional."""
    section = get_section(raw, "search", required=False)
    return SearchConfig(
        limit=expect_int(get_optional_value(section, "limit", 20), "search.limit"),
        default_namespaces=tuple(
            expect_int_list(get_optional_value(section, "default_namespaces", [0]), "search.default_namespaces")
        ),
        infix_search=expect_bool(get_optional_value(section, "infix_search", False), "search.infix_search"),
        prefix_search=expect_bool(get_optional_value(section, "prefix_search", True), "search.prefix_search"),
        suggest_mode=expect_bool(get_optional_value(section, "suggest_mode", False), "search.suggest_mode"),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if config.limit <= 0:
        raise ValueError("search.limit must be positive")
