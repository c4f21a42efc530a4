"""CLI command for assigning issues."""

from typing import Optional

import typer

from jig.interactivity import prompt_select
from jig.jira import EmptyResultError
from jig.cli.utils import COMMAND_ERRORS, fail, load_config_and_client, resolve_issue


def assign_command(
    issue_key: Optional[str] = typer.Argument(
        None,
        help="Issue key; defaults to the key in the current branch name",
    ),
    user: str = typer.Option(
        "",
        "--user",
        "-u",
        help="Search text for the assignee (name or email)",
    ),
) -> None:
    """Assign a Jira issue to a user."""
    try:
        config, client = load_config_and_client()
        with client:
            issue = resolve_issue(client, config, issue_key)
            users = client.get_assignable_users(issue.key, user)
            if not users:
                raise EmptyResultError(f"No assignable users found for '{user}'")

            chosen = users[0] if len(users) == 1 else prompt_select("Assignee:", users)
            client.assign_user(issue.key, chosen)
        typer.echo(f"Assigned {issue.key} to {chosen.display_name}")

    except COMMAND_ERRORS as e:
        fail(e)
