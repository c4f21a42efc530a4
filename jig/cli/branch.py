"""CLI command for creating or switching to issue branches."""

from typing import Optional

import typer

from jig.branch import BranchMode, UsageConflictError, branch_name_from_issue, issue_branch_exists
from jig.git import checkout_branch
from jig.interactivity import prompt_issue_select, query_issue_details, query_issues_with_retry
from jig.keys import extract_issue_key
from jig.cli.utils import COMMAND_ERRORS, fail, load_config_and_client


def branch_command(
    issue_key: Optional[str] = typer.Argument(
        None,
        help="Issue key (e.g., AB-123). Prompts with your issues when omitted.",
    ),
    short: bool = typer.Option(
        False,
        "--short",
        "-s",
        help="Use the issue key alone as branch name (inverts always_short_branch_names)",
    ),
    append: Optional[str] = typer.Option(
        None,
        "--append",
        "-a",
        help="Append text to the generated branch name",
    ),
    name: Optional[str] = typer.Option(
        None,
        "--name",
        "-n",
        help="Use this text instead of the issue summary",
    ),
) -> None:
    """Create or switch to the branch for a Jira issue."""
    try:
        mode = BranchMode.from_options(short, append, name)
    except UsageConflictError as e:
        raise typer.BadParameter(str(e))

    try:
        config, client = load_config_and_client()

        if config.always_short_branch_names and append is None and name is None:
            mode = BranchMode.default() if short else BranchMode.short()

        with client:
            if issue_key:
                issue = query_issue_details(client, extract_issue_key(issue_key))
            else:
                issue = prompt_issue_select(query_issues_with_retry(client, config))

        existing = issue_branch_exists(issue, mode)
        if existing is not None:
            typer.echo(f"Switching to existing branch: {existing}", err=True)
            checkout_branch(existing, create_new=False)
        else:
            branch_name = branch_name_from_issue(issue, mode)
            typer.echo(f"Creating branch: {branch_name}", err=True)
            checkout_branch(branch_name, create_new=True)

    except COMMAND_ERRORS as e:
        fail(e)
