"""CLI command for installing the commit-msg hook."""

import shutil
import sys
from pathlib import Path

import typer

from jig.git import GitError
from jig.hooks import HookError, install_commit_msg_hook


def find_executable() -> Path:
    """Locate the jig executable to link the hook to."""
    argv0 = Path(sys.argv[0])
    if argv0.name == "jig" and argv0.exists():
        return argv0.resolve()
    found = shutil.which("jig")
    if found is None:
        raise HookError("Unable to obtain path of executable (jig)")
    return Path(found).resolve()


def _confirm_replace(hook_file: Path) -> bool:
    return typer.confirm(f"Hook already exists, replace: {hook_file}", default=True)


def hook_command(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Replace an existing hook without asking",
    ),
) -> None:
    """Install jig as the commit-msg hook of the current repository."""
    try:
        installed = install_commit_msg_hook(
            find_executable(),
            force=force,
            confirm_replace=_confirm_replace,
        )
    except (HookError, GitError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if installed is None:
        typer.echo("Keeping existing hook.")
    else:
        typer.echo(f"Installed commit-msg hook: {installed}")
