"""Command runner for coordinating CLI execution.

Manages logging configuration, component lifecycle, resource cleanup and
error handling for command execution.
"""

from __future__ import annotations

from typing import Callable

import click

from WikiSearch.config import AppConfig
from WikiSearch.services import create_search_engine
from WikiSearch.services.search import SearchEngine
from WikiSearch.storage import create_storage
from WikiSearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(
        self,
        action: str,
        work: Callable[[SearchEngine], None],
        *,
        limit: int | None = None,
        offset: int = 0,
        namespaces: tuple[int, ...] = (),
    ) -> None:
        """Build the engine, run `work` with it, and clean up.

        Args:
            action: The CLI command name (e.g. 'search').
            work: Command body receiving the configured engine.
            limit: Results per page; the configured default when None.
            offset: Number of results to skip.
            namespaces: Default namespaces overriding the configured ones.

        Raises:
            click.Abort: When the command fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            db_manager, pages = create_storage(self.config)
            with db_manager:
                engine = create_search_engine(self.config, pages)
                engine.set_limit_offset(limit or engine.limit, offset)
                if namespaces:
                    engine.set_namespaces(namespaces)
                work(engine)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e
