"""CLI entry point for jig.

``main`` is the console script. When git runs jig through the commit-msg
symlink it validates the message file instead of parsing commands.
"""

import sys
from pathlib import Path
from typing import Optional

import typer

from jig.cli.assign import assign_command
from jig.cli.branch import branch_command
from jig.cli.comment import comment_command
from jig.cli.config import init_config, print_configs
from jig.cli.hook import hook_command
from jig.cli.callback import main_command
from jig.cli.open import open_command
from jig.cli.query import query_command
from jig.cli.transition import transition_command
from jig.cli.worklog import worklog_command
from jig.config import ConfigError, load_config
from jig.git import GitError
from jig.hooks import HookError, is_git_hook, run_commit_msg_hook
from jig.interactivity import SelectionAborted, select_issue_key
from jig.jira import JiraError
from jig.keys import MalformedKeyError
from jig.utils.logging import log_message, setup_logging

HOOK_ERRORS = (HookError, GitError, ConfigError, JiraError, MalformedKeyError, SelectionAborted)

# Main application
app = typer.Typer(
    name="jig",
    help="jig: Jira integration for git",
    add_completion=False,
)

# Commands with their one-letter aliases
_COMMANDS = [
    ("branch", "b", branch_command),
    ("comment", "c", comment_command),
    ("log", "l", worklog_command),
    ("move", "m", transition_command),
    ("assign", "a", assign_command),
    ("open", "o", open_command),
]
for _name, _alias, _func in _COMMANDS:
    app.command(_name)(_func)
    app.command(_alias, hidden=True)(_func)

app.command("query")(query_command)
app.command("hook")(hook_command)
app.command("init")(init_config)
app.command("configs")(print_configs)

app.callback(invoke_without_command=True)(main_command)


def run_hook(argv: list[str]) -> int:
    """Run the commit-msg hook for ``argv`` as passed by git.

    Returns:
        Process exit code: 0 lets the commit through.
    """
    setup_logging()
    if len(argv) < 2:
        typer.secho("Error: commit-msg hook expects the message file path", fg="red", err=True)
        return 1

    try:
        config = load_config()
        run_commit_msg_hook(
            Path(argv[1]),
            config,
            select_issue_key=lambda: select_issue_key(config),
        )
    except HOOK_ERRORS as e:
        log_message(f"commit-msg hook rejected message: {e}")
        typer.secho(f"Error: {e}", fg="red", err=True)
        typer.echo("Skip check with: --no-verify", err=True)
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Console script entry point."""
    argv = sys.argv if argv is None else argv
    if is_git_hook(argv[0]):
        sys.exit(run_hook(argv))
    app()


__all__ = [
    "app",
    "main",
    "run_hook",
    "branch_command",
    "comment_command",
    "worklog_command",
    "transition_command",
    "assign_command",
    "open_command",
    "query_command",
    "hook_command",
    "init_config",
    "print_configs",
    "main_command",
]
