"""Top-level callback for the jig CLI."""

from typing import Optional

import typer

from jig import __version__
from jig.utils.logging import setup_logging


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"jig {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show the version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Jira integration for git: issue branches, worklogs and commit-msg checks."""
    setup_logging()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
