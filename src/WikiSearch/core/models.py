from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class PageRecord:
    """A search hit resolved to a wiki page.

    Attributes:
        page_id: Primary key of the page row (the index document id).
        namespace: Namespace id of the page.
        title: Page title in database form (underscores, no namespace).
        prefixed_title: Display title with namespace prefix, e.g. "Help:Foo bar".
        score: Relevance weight reported by the index server.
        attributes: Extra attributes returned with the match.
    """

    page_id: int
    namespace: int
    title: str
    prefixed_title: str = ""
    score: int = 0
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def text(self) -> str:
        """Title without namespace, spaces instead of underscores."""
        return self.title.replace("_", " ")
