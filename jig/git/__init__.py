"""Git accessor module for jig.

This package provides:
- exceptions: GitError
- runner: _run_git_command, get_repo_root
- branch: get_branch, get_default_remote, branch_exists, checkout_branch
- hooks: get_hooks_path
"""

from jig.git.exceptions import GitError
from jig.git.runner import (
    _run_git_command,
    get_repo_root,
)
from jig.git.branch import (
    DETACHED_HEAD,
    branch_exists,
    checkout_branch,
    get_branch,
    get_default_remote,
)
from jig.git.hooks import get_hooks_path


__all__ = [
    "GitError",
    "_run_git_command",
    "get_repo_root",
    "DETACHED_HEAD",
    "get_branch",
    "get_default_remote",
    "branch_exists",
    "checkout_branch",
    "get_hooks_path",
]
