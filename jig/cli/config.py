"""CLI commands for creating and locating jig configuration files."""

import typer

from jig.config import (
    Config,
    ConfigError,
    JiraConfig,
    get_global_config_file,
    get_workspace_config_file,
    save_config,
)
from jig.interactivity import SelectionAborted, prompt_select
from jig.jira import normalize_url

CLOUD_TOKEN_URL = "https://id.atlassian.com/manage-profile/security/api-tokens"


def _prompt_credentials(jira: JiraConfig) -> None:
    """Ask for the token matching the Jira flavour (api token on Cloud, PAT otherwise)."""
    if "atlassian.net" in jira.url:
        typer.echo(f"Get an API token here:\n{CLOUD_TOKEN_URL}")
        jira.api_token = typer.prompt("Auth token", hide_input=True)
        jira.user_login = typer.prompt("Username")
    else:
        typer.echo(f"Get a personal access token here:\n{jira.url}/secure/ViewProfile.jspa")
        jira.pat_token = typer.prompt("Auth token", hide_input=True)


def init_config(
    all_options: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Also prompt for queries and behaviour settings",
    ),
) -> None:
    """Create a jig configuration file interactively."""
    global_file = get_global_config_file()
    workspace_file = get_workspace_config_file()

    try:
        config_file = prompt_select("Where to save config:", [global_file, workspace_file])
    except SelectionAborted as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    config = Config()
    config.jira.url = normalize_url(
        typer.prompt("Jira url (scheme defaults to https)").strip()
    )
    _prompt_credentials(config.jira)

    if all_options:
        config.issue_query = typer.prompt("Issue query", default=config.issue_query)
        config.retry_query = typer.prompt("Retry query", default=config.retry_query)
        config.jira.max_query_results = typer.prompt(
            "Maximum query results",
            type=int,
            default=config.jira.max_query_results,
        )
        config.always_confirm_date = typer.confirm(
            "Always ask date when posting worklog (invert with 'log --date')?",
            default=True,
        )
        config.always_short_branch_names = typer.confirm(
            "Use only issue key as branch name (invert with 'branch --short')?",
            default=False,
        )
        config.enable_comment_prompts = typer.confirm(
            "Prompt for optional comments?",
            default=False,
        )
        config.one_transition_auto_move = typer.confirm(
            "Skip transition select when only one transition is valid?",
            default=False,
        )

    if config_file.exists():
        overwrite = typer.confirm(f"{config_file} already exists. Overwrite?", default=False)
        if not overwrite:
            typer.echo("Keeping existing configuration.")
            raise typer.Exit(0)

    try:
        save_config(config, config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Configuration saved to {config_file}")


def print_configs() -> None:
    """Show which configuration files are in use."""
    global_file = get_global_config_file()
    workspace_file = get_workspace_config_file()

    if global_file.exists():
        typer.echo(f"Global: {global_file}")
    if workspace_file.exists():
        typer.echo(f"Workspace: {workspace_file}")

    if not global_file.exists() and not workspace_file.exists():
        typer.echo("Error: Config files missing, expected one or both:", err=True)
        typer.echo(f"  {global_file}", err=True)
        typer.echo(f"  {workspace_file}", err=True)
        raise typer.Exit(1)
