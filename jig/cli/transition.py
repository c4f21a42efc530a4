"""CLI command for moving issues through their workflow."""

from typing import Optional

import typer

from jig.interactivity import prompt_select
from jig.cli.utils import COMMAND_ERRORS, fail, load_config_and_client, resolve_issue


def transition_command(
    issue_key: Optional[str] = typer.Argument(
        None,
        help="Issue key; defaults to the key in the current branch name",
    ),
) -> None:
    """Move a Jira issue to another status."""
    try:
        config, client = load_config_and_client()
        with client:
            issue = resolve_issue(client, config, issue_key)
            transitions = client.get_transitions(issue.key)

            if len(transitions) == 1 and config.one_transition_auto_move:
                transition = transitions[0]
            else:
                transition = prompt_select("Move to:", transitions)

            client.post_transition(issue.key, transition)

            if config.enable_comment_prompts:
                comment = typer.prompt("Comment (leave empty to skip)", default="", err=True)
                if comment.strip():
                    client.post_comment(issue.key, comment)

        typer.echo(f"Moved {issue.key} to '{transition.name}'")

    except COMMAND_ERRORS as e:
        fail(e)
