"""Helpers shared by the jig CLI commands."""

from typing import Optional

import typer

from jig.config import Config, ConfigError, load_config
from jig.git import GitError, get_branch
from jig.jira import Issue, JiraClient, JiraError
from jig.keys import MalformedKeyError, extract_issue_key
from jig.interactivity import SelectionAborted, issue_from_branch_or_prompt, query_issue_details

# Errors reported at the command boundary as "Error: ..." with exit code 1
COMMAND_ERRORS = (ConfigError, GitError, JiraError, MalformedKeyError, SelectionAborted)


def fail(error: Exception) -> None:
    """Print an error to stderr and exit with status 1."""
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


def get_current_branch_safe() -> Optional[str]:
    """Get the current branch name, or None outside a git repository."""
    try:
        return get_branch()
    except GitError:
        return None


def load_config_and_client() -> tuple[Config, JiraClient]:
    """Load the config and build a Jira client from it."""
    config = load_config()
    return config, JiraClient(config.jira)


def resolve_issue(client: JiraClient, config: Config, issue_key: Optional[str]) -> Issue:
    """Resolve an issue from an explicit key, the current branch, or a prompt."""
    if issue_key:
        return query_issue_details(client, extract_issue_key(issue_key))
    return issue_from_branch_or_prompt(client, config, get_current_branch_safe())
