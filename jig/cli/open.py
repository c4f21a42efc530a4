"""CLI command for opening issues in the browser."""

import webbrowser
from typing import Optional

import typer

from jig.cli.utils import COMMAND_ERRORS, fail, load_config_and_client, resolve_issue


def open_command(
    issue_key: Optional[str] = typer.Argument(
        None,
        help="Issue key; defaults to the key in the current branch name",
    ),
) -> None:
    """Open a Jira issue in the web browser."""
    try:
        config, client = load_config_and_client()
        with client:
            issue = resolve_issue(client, config, issue_key)
            url = client.browse_url(issue.key)
    except COMMAND_ERRORS as e:
        fail(e)

    typer.echo(url)
    webbrowser.open(url)
