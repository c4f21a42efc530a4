"""Git hooks for jig.

This package provides:
- exceptions: HookError, BranchStateError, KeyMismatchError,
  MissingKeyError, ConformanceError
- commit_msg: validate_commit_message, run_commit_msg_hook
- install: install_commit_msg_hook
"""

from jig.hooks.exceptions import (
    BranchStateError,
    ConformanceError,
    HookError,
    KeyMismatchError,
    MissingKeyError,
)
from jig.hooks.commit_msg import (
    HOOK_NAME,
    CommitCase,
    classify,
    is_boilerplate,
    is_git_hook,
    run_commit_msg_hook,
    validate_commit_message,
)
from jig.hooks.install import install_commit_msg_hook


__all__ = [
    "HookError",
    "BranchStateError",
    "KeyMismatchError",
    "MissingKeyError",
    "ConformanceError",
    "HOOK_NAME",
    "CommitCase",
    "classify",
    "is_boilerplate",
    "is_git_hook",
    "run_commit_msg_hook",
    "validate_commit_message",
    "install_commit_msg_hook",
]
