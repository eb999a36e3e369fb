from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from WikiSearch.config.database import DatabaseConfig, check_database, load_database
from WikiSearch.config.runtime import RuntimeConfig, check_runtime, load_runtime
from WikiSearch.config.search import SearchConfig, check_search, load_search
from WikiSearch.config.searchd import SearchdConfig, check_searchd, load_searchd
from WikiSearch.config.wiki import WikiConfig, check_wiki, load_wiki

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    searchd: SearchdConfig
    search: SearchConfig
    database: DatabaseConfig
    wiki: WikiConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    searchd = load_searchd(raw)
    search = load_search(raw)
    database = load_database(raw)
    wiki = load_wiki(raw)

    check_runtime(runtime)
    check_searchd(searchd)
    check_search(search)
    check_database(database)
    check_wiki(wiki)

    return AppConfig(
        runtime=runtime,
        searchd=searchd,
        search=search,
        database=database,
        wiki=wiki,
    )


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
    *,
    defaults_text: str | None = None,
) -> AppConfig:
    """Load config by merging an override file over the defaults.

    Args:
        config_path: Override config file.
        default_path: Defaults file, read when `defaults_text` is not given.
        defaults_text: Defaults as YAML text.

    Returns:
        Parsed and validated configuration.
    """
    if defaults_text is None:
        if config_path == default_path:
            return load_config(config_path)
        defaults_text = default_path.read_text(encoding="utf-8")
    base = parse_yaml(defaults_text)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; lists and scalars are replaced."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
