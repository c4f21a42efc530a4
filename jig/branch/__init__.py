"""Branch naming and issue branch lookup for jig."""

from jig.branch.exceptions import UsageConflictError
from jig.branch.naming import (
    MAX_STEM_LENGTH,
    BranchMode,
    BranchModeKind,
    branch_name_from_issue,
    overwriting_suffixer,
    sanitize_branch_name,
)
from jig.branch.lookup import issue_branch_exists


__all__ = [
    "UsageConflictError",
    "MAX_STEM_LENGTH",
    "BranchMode",
    "BranchModeKind",
    "branch_name_from_issue",
    "overwriting_suffixer",
    "sanitize_branch_name",
    "issue_branch_exists",
]
