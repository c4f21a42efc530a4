"""CLI command for logging work on issues."""

from typing import Optional

import typer

from jig.interactivity import prompt_date
from jig.jira import WorklogDuration, WorklogRequest
from jig.cli.utils import COMMAND_ERRORS, fail, load_config_and_client, resolve_issue


def worklog_command(
    duration: str = typer.Argument(
        ...,
        help="Time spent, e.g. 30m, 2h, 1.5d, 1w (bare number = minutes)",
    ),
    issue_key: Optional[str] = typer.Argument(
        None,
        help="Issue key; defaults to the key in the current branch name",
    ),
    comment: Optional[str] = typer.Option(
        None,
        "--comment",
        "-c",
        help="Worklog comment",
    ),
    toggle_date: bool = typer.Option(
        False,
        "--date",
        "-d",
        help="Invert always_confirm_date for this worklog",
    ),
) -> None:
    """Log work on a Jira issue."""
    try:
        time_spent = WorklogDuration(duration)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    try:
        config, client = load_config_and_client()
        with client:
            issue = resolve_issue(client, config, issue_key)

            if comment is None and config.enable_comment_prompts:
                comment = typer.prompt("Worklog comment", default="", err=True)

            worklog = WorklogRequest(
                comment=comment or "",
                started=prompt_date(config, toggle_date),
                time_spent_seconds=time_spent,
            )
            client.post_worklog(issue.key, worklog)
        typer.echo(f"Logged {duration} on {issue.key}")

    except COMMAND_ERRORS as e:
        fail(e)
