"""Git hook exception classes.

Contains all exception classes raised while validating a commit message:
- HookError: Base exception for hook failures (aborts the commit)
- BranchStateError: The branch name is empty
- KeyMismatchError: Branch and commit message carry different issue keys
- MissingKeyError: The branch has no issue key and that is not allowed
- ConformanceError: The corrected message still fails the final regex
"""


class HookError(Exception):
    """Base exception for git hook failures."""

    pass


class BranchStateError(HookError):
    """Raised when the current branch name is empty."""

    pass


class KeyMismatchError(HookError):
    """Raised when the commit message key differs from the branch key."""

    pass


class MissingKeyError(HookError):
    """Raised when no issue key can be inferred for the commit."""

    pass


class ConformanceError(HookError):
    """Raised when the final commit message does not match the required format."""

    pass
