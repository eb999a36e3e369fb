from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence


class RestrictionMode(Enum):
    """How the namespace filter of one query was decided."""

    UNSET = "unset"
    ALL = "all"
    RESTRICTED = "restricted"


@dataclass(frozen=True, slots=True)
class NamespaceRestriction:
    """Namespace filter accumulated while rewriting a query.

    `UNSET` means no directive touched the namespaces, so the caller's default
    namespaces apply. `ALL` is the explicit "search all" request and disables
    the namespace filter. `RESTRICTED` carries the ordered namespace ids.
    """

    mode: RestrictionMode = RestrictionMode.UNSET
    ids: tuple[int, ...] = ()

    @classmethod
    def everything(cls) -> NamespaceRestriction:
        return cls(mode=RestrictionMode.ALL)

    @classmethod
    def only(cls, ids: Sequence[int]) -> NamespaceRestriction:
        return cls(mode=RestrictionMode.RESTRICTED, ids=tuple(ids))

    @property
    def is_unset(self) -> bool:
        return self.mode is RestrictionMode.UNSET

    @property
    def is_all(self) -> bool:
        return self.mode is RestrictionMode.ALL

    def with_namespace(self, namespace: int) -> NamespaceRestriction:
        """Return a restriction that also includes `namespace`."""
        current = self.ids if self.mode is RestrictionMode.RESTRICTED else ()
        return NamespaceRestriction.only((*current, namespace))

    def resolve(self, default: Sequence[int]) -> tuple[int, ...]:
        """Return the namespace ids to filter on; empty means no filter."""
        if self.mode is RestrictionMode.ALL:
            return ()
        if self.mode is RestrictionMode.UNSET:
            return tuple(default)
        return self.ids


@dataclass(frozen=True, slots=True)
class Directive:
    """One `prefix:value` directive found in a raw query.

    Attributes:
        separator: Boundary text before the directive (start, space, pipe or
            colon). Kept in front of the replacement.
        negated: True when the directive was written as `-prefix:value`.
        prefix: Prefix token as typed by the user.
        value: Text after the colon, up to the next space.
        text: Full matched text, including separator or negation marker.
    """

    separator: str
    negated: bool
    prefix: str
    value: str
    text: str


@dataclass(slots=True)
class RewriteState:
    """Mutable filter state built while rewriting one query."""

    namespaces: NamespaceRestriction = field(default_factory=NamespaceRestriction)
    categories: list[int] = field(default_factory=list)
    exclude_categories: list[int] = field(default_factory=list)
    title_clauses: list[str] = field(default_factory=list)

    def add_namespace(self, namespace: int) -> None:
        self.namespaces = self.namespaces.with_namespace(namespace)

    def restrict_to(self, namespace: int) -> None:
        self.namespaces = NamespaceRestriction.only((namespace,))

    def search_all(self) -> None:
        self.namespaces = NamespaceRestriction.everything()
