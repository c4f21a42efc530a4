"""Git hooks directory lookup."""

from pathlib import Path

from jig.git.exceptions import GitError
from jig.git.runner import _run_git_command, get_repo_root


def get_hooks_path() -> Path:
    """Get the directory git runs hooks from.

    Uses ``core.hooksPath`` when configured (with ``~`` expanded), otherwise
    ``<repo root>/.git/hooks``.

    Raises:
        GitError: If core.hooksPath is unset and cwd is not a repository.
    """
    try:
        configured = _run_git_command(["config", "--get", "core.hooksPath"])
    except GitError:
        configured = ""

    if configured:
        return Path(configured).expanduser()

    try:
        repo_root = get_repo_root()
    except GitError:
        raise GitError(
            "Unable to decide on install location: current directory is not a Git "
            "repository and core.hooksPath is undefined.\n"
            "Try configuring one: git config --global core.hooksPath <directory>"
        )
    return repo_root / ".git" / "hooks"
