"""Database domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from WikiSearch.config.common import expect_str, get_required_value, get_section


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Location of the page database."""

    path: str


def load_database(raw: Mapping[str, Any]) -> DatabaseConfig:
    """Load the `database` section."""
    section = get_section(raw, "database", required=True)
    return DatabaseConfig(
        path=expect_str(get_required_value(section, "path", "database.path"), "database.path"),
    )


def check_database(config: DatabaseConfig) -> None:
    """Validate database domain constraints."""
    if not config.path.strip():
        raise ValueError("database.path must not be empty")
