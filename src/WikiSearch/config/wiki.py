"""Wiki content-language configuration (namespaces, keywords)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from WikiSearch.config.common import (
    expect_bool,
    expect_int,
    expect_str,
    get_optional_value,
    get_section,
)
from WikiSearch.core.namespaces import CANONICAL_NAMESPACES, DEFAULT_ALIASES, NamespaceTable


@dataclass(frozen=True, slots=True)
class WikiConfig:
    """Store validated content-language settings.

    Attributes:
        search_all_keyword: Localized "search all" prefix keyword.
        word_breaks: Whether the content language separates words with spaces.
        namespaces: Localized namespace names by id; empty uses canonical names.
        canonical_namespaces: Canonical namespace names by id.
        namespace_aliases: Alias names mapped to namespace ids.
    """

    search_all_keyword: str = "all"
    word_breaks: bool = True
    namespaces: Mapping[int, str] = field(default_factory=dict)
    canonical_namespaces: Mapping[int, str] = field(default_factory=lambda: dict(CANONICAL_NAMESPACES))
    namespace_aliases: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_ALIASES))

    def namespace_table(self) -> NamespaceTable:
        return NamespaceTable(
            names=self.namespaces,
            canonical=self.canonical_namespaces,
            aliases=self.namespace_aliases,
        )


def load_wiki(raw: Mapping[str, Any]) -> WikiConfig:
    """Load the `wiki` section; every key is optional.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "wiki", required=False)
    canonical = get_optional_value(section, "canonical_namespaces", None)
    aliases = get_optional_value(section, "namespace_aliases", None)
    return WikiConfig(
        search_all_keyword=expect_str(
            get_optional_value(section, "search_all_keyword", "all"), "wiki.search_all_keyword"
        ).strip(),
        word_breaks=expect_bool(get_optional_value(section, "word_breaks", True), "wiki.word_breaks"),
        namespaces=_id_to_name(get_optional_value(section, "namespaces", {}), "wiki.namespaces"),
        canonical_namespaces=(
            _id_to_name(canonical, "wiki.canonical_namespaces") if canonical is not None else dict(CANONICAL_NAMESPACES)
        ),
        namespace_aliases=(
            _name_to_id(aliases, "wiki.namespace_aliases") if aliases is not None else dict(DEFAULT_ALIASES)
        ),
    )


def check_wiki(config: WikiConfig) -> None:
    """Validate wiki domain constraints.

    Raises:
        ValueError: If a namespace name contains a colon.
    """
    for config_key, names in (
        ("wiki.namespaces", config.namespaces),
        ("wiki.canonical_namespaces", config.canonical_namespaces),
    ):
        for ns, name in names.items():
            if ":" in name:
                raise ValueError(f"{config_key}.{ns} must not contain ':': {name}")
    for name in config.namespace_aliases:
        if ":" in name or not name.strip():
            raise ValueError(f"Invalid namespace alias: {name!r}")


def _id_to_name(value: Any, config_key: str) -> dict[int, str]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    out: dict[int, str] = {}
    for key, name in value.items():
        # JSON-style configs carry namespace ids as string keys
        if isinstance(key, str) and key.strip().lstrip("-").isdigit():
            key = int(key)
        ns = expect_int(key, f"{config_key} keys")
        out[ns] = expect_str("" if name is None else name, f"{config_key}.{key}")
    return out


def _name_to_id(value: Any, config_key: str) -> dict[str, int]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    out: dict[str, int] = {}
    for name, ns in value.items():
        out[expect_str(name, f"{config_key} key")] = expect_int(ns, f"{config_key}.{name}")
    return out
