"""CLI command for running raw JQL queries."""

import json
from typing import Optional

import typer

from jig.cli.utils import COMMAND_ERRORS, fail, load_config_and_client


def query_command(
    jql: str = typer.Argument(..., help="JQL query"),
    fields: Optional[list[str]] = typer.Option(
        None,
        "--field",
        "-f",
        help="Field to return (repeatable; default: summary)",
    ),
) -> None:
    """Run a JQL query and print the raw JSON response."""
    try:
        _, client = load_config_and_client()
        with client:
            result = client.search(jql, fields)
    except COMMAND_ERRORS as e:
        fail(e)

    typer.echo(json.dumps(result, indent=2))
