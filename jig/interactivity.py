"""Interactive prompts backed by Jira queries.

Selections follow a numbered list + ``typer.prompt`` pattern; an empty answer aborts.
Prompts and lists go to stderr so command output on stdout stays clean.
"""

from datetime import date, datetime
from typing import Optional, Sequence, TypeVar

import typer

from jig.config import Config
from jig.jira import EmptyResultError, Issue, JiraClient, JiraError
from jig.keys import IssueKey, find_issue_key
from jig.utils.logging import log_message

T = TypeVar("T")

# Jira cannot parse a colon in the UTC offset, so %z is used instead of isoformat()
JIRA_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S.000%z"


class SelectionAborted(Exception):
    """Raised when a prompt is left without a valid choice."""

    pass


def prompt_select(title: str, options: Sequence[T]) -> T:
    """Ask the user to pick one option from a numbered list.

    Args:
        title: Prompt heading.
        options: Items to choose from, rendered with str().

    Returns:
        The chosen item.

    Raises:
        SelectionAborted: If options is empty, or the answer is empty,
            not a number or out of range.
    """
    if not options:
        raise SelectionAborted(f"{title} empty list")

    typer.echo(title, err=True)
    for i, option in enumerate(options, 1):
        typer.echo(f"  {i}. {option}", err=True)

    # An empty default lets a bare Enter through instead of re-prompting
    answer = typer.prompt(
        f"Select (1-{len(options)})", default="", show_default=False, err=True
    ).strip()
    if not answer:
        raise SelectionAborted("No choice made. Aborting.")
    try:
        choice = int(answer)
    except ValueError:
        raise SelectionAborted("Invalid choice. Aborting.")
    if choice < 1 or choice > len(options):
        raise SelectionAborted("Invalid choice. Aborting.")
    return options[choice - 1]


def prompt_issue_select(issues: Sequence[Issue]) -> Issue:
    """Ask the user to pick a Jira issue."""
    return prompt_select("Jira issue:", issues)


def query_issue_details(client: JiraClient, issue_key: IssueKey) -> Issue:
    """Fetch the summary of a single issue.

    Raises:
        JiraError: If the issue cannot be found.
    """
    try:
        return client.get_issue(issue_key)
    except EmptyResultError:
        raise JiraError(f"Error issue not found: {issue_key}")


def query_issues_with_retry(client: JiraClient, config: Config) -> list[Issue]:
    """Run the configured issue query, falling back to the retry query.

    Raises:
        JiraError: If both queries fail or return nothing.
    """
    try:
        return client.query_issues(config.issue_query)
    except JiraError as e:
        log_message(f"First issue query failed: {e}")
    try:
        return client.query_issues(config.retry_query)
    except JiraError as e:
        raise JiraError(f"Retry query failed: {e}")


def issue_from_branch_or_prompt(
    client: JiraClient,
    config: Config,
    head_name: Optional[str],
) -> Issue:
    """Resolve the issue for the current branch, or let the user pick one.

    Args:
        client: Jira client.
        config: Loaded config (for the issue queries).
        head_name: Current branch name, or None outside a repository.
    """
    issue_key = find_issue_key(head_name or "")
    if issue_key is not None:
        return query_issue_details(client, issue_key)

    issues = query_issues_with_retry(client, config)
    return prompt_issue_select(issues)


def select_issue_key(config: Config) -> IssueKey:
    """Query the user's issues and prompt for one, returning its key.

    Used by the commit-msg hook when neither branch nor message carries a key.
    """
    with JiraClient(config.jira) as client:
        issues = query_issues_with_retry(client, config)
    return prompt_issue_select(issues).key


def format_started(when: datetime) -> str:
    """Format a timestamp for the worklog 'started' field."""
    return when.strftime(JIRA_DATETIME_FORMAT)


def prompt_date(config: Config, toggle_prompt: bool = False) -> str:
    """Get the worklog start time, asking for a date when configured.

    ``always_confirm_date`` decides whether to prompt; ``toggle_prompt``
    inverts it. The time of day is always now.

    Returns:
        A Jira-formatted timestamp.
    """
    now = datetime.now().astimezone()
    do_prompt = config.always_confirm_date
    if toggle_prompt:
        do_prompt = not do_prompt

    if not do_prompt:
        return format_started(now)

    raw = typer.prompt("Worklog date (YYYY-MM-DD)", default=date.today().isoformat(), err=True)
    try:
        chosen = datetime.strptime(raw.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise SelectionAborted(f"Invalid date: {raw}")
    return format_started(now.replace(year=chosen.year, month=chosen.month, day=chosen.day))
