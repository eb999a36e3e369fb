"""CLI package for WikiSearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from WikiSearch.cli.runner import CommandRunner
from WikiSearch.cli.ui import cli


def main() -> None:
    """Run WikiSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
