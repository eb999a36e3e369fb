"""Wiki namespace names and lookup.

Namespace names come in three flavours: the localized names of the content
language, the canonical (English) names, and aliases. All three resolve to the
same integer ids. Lookups ignore case and treat spaces and underscores alike.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

NS_MEDIA = -2
NS_SPECIAL = -1
NS_MAIN = 0
NS_CATEGORY = 14

CANONICAL_NAMESPACES: Mapping[int, str] = MappingProxyType(
    {
        -2: "Media",
        -1: "Special",
        1: "Talk",
        2: "User",
        3: "User_talk",
        4: "Project",
        5: "Project_talk",
        6: "File",
        7: "File_talk",
        8: "MediaWiki",
        9: "MediaWiki_talk",
        10: "Template",
        11: "Template_talk",
        12: "Help",
        13: "Help_talk",
        14: "Category",
        15: "Category_talk",
    }
)

DEFAULT_ALIASES: Mapping[str, int] = MappingProxyType(
    {
        "Image": 6,
        "Image_talk": 7,
    }
)


def normalize_name(name: str) -> str:
    return name.strip().replace(" ", "_")


@dataclass(frozen=True, slots=True)
class NamespaceTable:
    """Namespace names of the content language.

    Attributes:
        names: Localized namespace names keyed by id. The main namespace has
            an empty name.
        canonical: Canonical namespace names keyed by id.
        aliases: Alternative names mapped to ids.
    """

    names: Mapping[int, str] = field(default_factory=dict)
    canonical: Mapping[int, str] = field(default_factory=lambda: dict(CANONICAL_NAMESPACES))
    aliases: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_ALIASES))
    _index: Mapping[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        names = dict(self.names) if self.names else {NS_MAIN: "", **CANONICAL_NAMESPACES}
        object.__setattr__(self, "names", MappingProxyType({k: normalize_name(v) for k, v in names.items()}))
        object.__setattr__(
            self, "canonical", MappingProxyType({k: normalize_name(v) for k, v in self.canonical.items()})
        )
        object.__setattr__(
            self, "aliases", MappingProxyType({normalize_name(k): v for k, v in self.aliases.items()})
        )
        index: dict[str, int] = {}
        for ns, name in self.canonical.items():
            if name:
                index[name.lower()] = ns
        for name, ns in self.aliases.items():
            index[name.lower()] = ns
        # Localized names win over canonical names and aliases.
        for ns, name in self.names.items():
            if name:
                index[name.lower()] = ns
        object.__setattr__(self, "_index", MappingProxyType(index))

    def ns_index(self, name: str) -> int | None:
        """Return the namespace id for a name, or None when unknown."""
        return self._index.get(normalize_name(name).lower())

    def ns_text(self, namespace: int) -> str:
        """Return the localized namespace name (empty for the main namespace)."""
        name = self.names.get(namespace)
        if name is None:
            name = self.canonical.get(namespace, "")
        return name

    def prefixed_title(self, namespace: int, title: str) -> str:
        """Build a display title such as "Help:Foo bar"."""
        text = title.replace("_", " ")
        ns_text = self.ns_text(namespace).replace("_", " ")
        return f"{ns_text}:{text}" if ns_text else text

    def prefix_names(self) -> list[str]:
        """All namespace names usable as query prefixes."""
        out: list[str] = []
        out.extend(self.names.values())
        out.extend(self.canonical.values())
        out.extend(self.aliases.keys())
        return [name for name in out if name]
