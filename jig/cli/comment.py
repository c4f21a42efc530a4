"""CLI command for commenting on issues."""

from typing import Optional

import typer

from jig.cli.utils import COMMAND_ERRORS, fail, load_config_and_client, resolve_issue


def comment_command(
    comment: Optional[str] = typer.Argument(
        None,
        help="Comment text. Prompts for it when omitted.",
    ),
    issue_key: Optional[str] = typer.Option(
        None,
        "--issue",
        "-i",
        help="Issue key; defaults to the key in the current branch name",
    ),
) -> None:
    """Post a comment on a Jira issue."""
    try:
        config, client = load_config_and_client()
        with client:
            issue = resolve_issue(client, config, issue_key)

            if comment is None:
                comment = typer.prompt(f"Comment on {issue.key}", err=True)
            if not comment.strip():
                typer.echo("Empty comment. Aborting.", err=True)
                raise typer.Exit(1)

            client.post_comment(issue.key, comment)
        typer.echo(f"Comment posted on {issue.key}")

    except COMMAND_ERRORS as e:
        fail(e)
