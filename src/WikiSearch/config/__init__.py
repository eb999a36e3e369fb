from __future__ import annotations

"""Public configuration API for WikiSearch."""

from WikiSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from WikiSearch.config.database import DatabaseConfig
from WikiSearch.config.runtime import RuntimeConfig
from WikiSearch.config.search import SearchConfig
from WikiSearch.config.searchd import SearchdConfig
from WikiSearch.config.wiki import WikiConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "DatabaseConfig",
    "RuntimeConfig",
    "SearchConfig",
    "SearchdConfig",
    "WikiConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
