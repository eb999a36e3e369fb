"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from WikiSearch.cli.commands import CompleteCommand, RewriteCommand, SearchCommand
from WikiSearch.cli.runner import CommandRunner
from WikiSearch.config import DEFAULT_CONFIG_PATH, load_config_with_defaults

_limit_option = click.option("--limit", type=click.IntRange(min=1), default=None, help="Results per page.")
_offset_option = click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True)
_namespace_option = click.option(
    "--namespace",
    "-n",
    "namespaces",
    type=int,
    multiple=True,
    help="Namespace id searched when the query names none (repeatable).",
)


@click.group(help="WikiSearch: query a wiki full-text index from the terminal.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file, merged over the defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    ctx.obj = load_config_with_defaults(config_path)


@cli.command("search")
@click.argument("term", nargs=-1, required=True)
@_limit_option
@_offset_option
@_namespace_option
@click.option("--titles", "titles_only", is_flag=True, help="Search page titles only.")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    term: tuple[str, ...],
    limit: int | None,
    offset: int,
    namespaces: tuple[int, ...],
    titles_only: bool,
    as_json: bool,
) -> None:
    """Search the wiki using wiki search syntax."""
    query = " ".join(term)
    CommandRunner(ctx.obj).run(
        ctx.command.name,
        lambda engine: SearchCommand(engine, titles_only=titles_only, as_json=as_json).execute(query),
        limit=limit,
        offset=offset,
        namespaces=namespaces,
    )


@cli.command("rewrite")
@click.argument("term", nargs=-1, required=True)
@_namespace_option
@click.pass_context
def rewrite_cmd(ctx: click.Context, term: tuple[str, ...], namespaces: tuple[int, ...]) -> None:
    """Show the index server clause and filters for a query."""
    query = " ".join(term)
    CommandRunner(ctx.obj).run(
        ctx.command.name,
        lambda engine: RewriteCommand(engine).execute(query),
        namespaces=namespaces,
    )


@cli.command("complete")
@click.argument("prefix")
@_limit_option
@_namespace_option
@click.pass_context
def complete_cmd(ctx: click.Context, prefix: str, limit: int | None, namespaces: tuple[int, ...]) -> None:
    """List page titles starting with PREFIX."""
    CommandRunner(ctx.obj).run(
        ctx.command.name,
        lambda engine: CompleteCommand(engine).execute(prefix),
        limit=limit,
        namespaces=namespaces,
    )
