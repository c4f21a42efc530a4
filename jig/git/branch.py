"""Git branch utilities.

Contains:
- get_branch: Get the current branch name ('HEAD' when detached)
- get_default_remote: Name of the remote used for fetching
- branch_exists: Check a branch locally and on the default remote
- checkout_branch: Check out an existing branch or create a new one
"""

import subprocess
from typing import Optional

from jig.git.exceptions import GitError
from jig.git.runner import _run_git_command
from jig.utils.logging import log_command

DETACHED_HEAD = "HEAD"


def get_branch() -> str:
    """Get the current branch name.

    Returns:
        The current branch name, or 'HEAD' when detached (including while
        a rebase replays commits).
    """
    branch = _run_git_command(["branch", "--show-current"])
    if not branch:
        return DETACHED_HEAD
    return branch


def get_default_remote() -> Optional[str]:
    """Get the remote used for fetching.

    Prefers the current branch's upstream remote, then 'origin', then the
    only configured remote.

    Returns:
        Remote name, or None if the repository has no remotes.
    """
    try:
        remotes = _run_git_command(["remote"]).split()
    except GitError:
        return None
    if not remotes:
        return None

    try:
        upstream = _run_git_command(
            ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}"]
        )
        remote = upstream.split("/", 1)[0]
        if remote in remotes:
            return remote
    except GitError:
        pass

    if "origin" in remotes:
        return "origin"
    return remotes[0]


def _ref_exists(ref: str) -> bool:
    try:
        _run_git_command(["show-ref", "--verify", "--quiet", ref])
        return True
    except GitError:
        return False


def branch_exists(branch_name: str) -> bool:
    """Check whether a branch exists locally or on the default remote.

    Args:
        branch_name: Short branch name (e.g. 'AB-12_Fix_login').
    """
    if _ref_exists(f"refs/heads/{branch_name}"):
        return True

    remote = get_default_remote()
    if remote is None:
        return False
    return _ref_exists(f"refs/remotes/{remote}/{branch_name}")


def checkout_branch(branch_name: str, create_new: bool) -> None:
    """Check out a branch, creating it when requested.

    Output from git is passed through to the terminal.

    Args:
        branch_name: Branch to check out.
        create_new: Pass -b to git checkout.

    Raises:
        GitError: If git fails or is not installed.
    """
    args = ["git", "checkout"]
    if create_new:
        args.append("-b")
    args.append(branch_name)

    try:
        result = subprocess.run(args, check=False)
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    log_command(" ".join(args), result.returncode)
    if result.returncode != 0:
        raise GitError(f"Failed to checkout branch: {branch_name}")
