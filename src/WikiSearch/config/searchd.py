"""Index server (searchd) configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from WikiSearch.config.common import (
    expect_float,
    expect_int,
    expect_str,
    expect_str_list,
    expect_weight_map,
    get_optional_value,
    get_required_value,
    get_section,
)
from WikiSearch.searchd.request import MatchMode, SortMode

_ALLOWED_SCHEMES = {"http", "https"}


@dataclass(frozen=True, slots=True)
class SearchdConfig:
    """Connection and ranking settings for the index server.

    Attributes:
        host: Daemon host name.
        port: Daemon HTTP port.
        scheme: URL scheme (http/https).
        timeout: Read timeout in seconds.
        api_key_env: Environment variable holding an optional bearer token.
        indexes: Index names queried together.
        field_weights: Per-field ranking weights.
        index_weights: Per-index ranking weights.
        match_mode: Match mode name.
        sort_mode: Sort mode name.
        sort_by: Sort attribute or clause, depending on `sort_mode`.
        max_matches: Maximum matches kept by the daemon per query.
        cutoff: Stop searching after this many matches (0 = no cutoff).
    """

    host: str
    port: int
    scheme: str = "http"
    timeout: float = 10.0
    api_key_env: str = ""
    indexes: tuple[str, ...] = ()
    field_weights: Mapping[str, int] = field(default_factory=dict)
    index_weights: Mapping[str, int] = field(default_factory=dict)
    match_mode: MatchMode = MatchMode.EXTENDED
    sort_mode: SortMode = SortMode.RELEVANCE
    sort_by: str = ""
    max_matches: int = 1000
    cutoff: int = 0

    @property
    def index_list(self) -> str:
        """Index names in the comma separated form the daemon expects."""
        return ",".join(self.indexes)


def load_searchd(raw: Mapping[str, Any]) -> SearchdConfig:
    """Load the `searchd` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing or enum values are unknown.
    """
    section = get_section(raw, "searchd", required=True)
    match_mode = expect_str(get_optional_value(section, "match_mode", "extended"), "searchd.match_mode")
    sort_mode = expect_str(get_optional_value(section, "sort_mode", "relevance"), "searchd.sort_mode")
    return SearchdConfig(
        host=expect_str(get_required_value(section, "host", "searchd.host"), "searchd.host"),
        port=expect_int(get_required_value(section, "port", "searchd.port"), "searchd.port"),
        scheme=expect_str(get_optional_value(section, "scheme", "http"), "searchd.scheme").lower(),
        timeout=expect_float(get_optional_value(section, "timeout", 10.0), "searchd.timeout"),
        api_key_env=expect_str(get_optional_value(section, "api_key_env", ""), "searchd.api_key_env"),
        indexes=tuple(
            name.strip()
            for name in expect_str_list(get_required_value(section, "indexes", "searchd.indexes"), "searchd.indexes")
            if name.strip()
        ),
        field_weights=expect_weight_map(get_optional_value(section, "field_weights", {}), "searchd.field_weights"),
        index_weights=expect_weight_map(get_optional_value(section, "index_weights", {}), "searchd.index_weights"),
        match_mode=_parse_enum(MatchMode, match_mode, "searchd.match_mode"),
        sort_mode=_parse_enum(SortMode, sort_mode, "searchd.sort_mode"),
        sort_by=expect_str(get_optional_value(section, "sort_by", ""), "searchd.sort_by"),
        max_matches=expect_int(get_optional_value(section, "max_matches", 1000), "searchd.max_matches"),
        cutoff=expect_int(get_optional_value(section, "cutoff", 0), "searchd.cutoff"),
    )


def check_searchd(config: SearchdConfig) -> None:
    """Validate searchd domain constraints.

    Raises:
        ValueError: If values violate searchd constraints.
    """
    if not config.host.strip():
        raise ValueError("searchd.host must not be empty")
    if not 0 < config.port < 65536:
        raise ValueError("searchd.port must be between 1 and 65535")
    if config.scheme not in _ALLOWED_SCHEMES:
        raise ValueError(f"searchd.scheme must be one of {sorted(_ALLOWED_SCHEMES)}")
    if config.timeout <= 0:
        raise ValueError("searchd.timeout must be positive")
    if not config.indexes:
        raise ValueError("searchd.indexes must include at least one index")
    if config.max_matches <= 0:
        raise ValueError("searchd.max_matches must be positive")
    if config.cutoff < 0:
        raise ValueError("searchd.cutoff must be 0 or positive")
    if config.sort_mode is not SortMode.RELEVANCE and not config.sort_by.strip():
        raise ValueError(f"searchd.sort_by is required for sort_mode={config.sort_mode.value}")


def _parse_enum(enum_type, value: str, config_key: str):
    try:
        return enum_type(value.strip().lower())
    except ValueError as e:
        allowed = sorted(item.value for item in enum_type)
        raise ValueError(f"{config_key} must be one of {allowed}") from e
