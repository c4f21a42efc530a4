"""Find an existing branch for an issue."""

from typing import Optional

from jig.branch.naming import BranchMode, branch_name_from_issue
from jig.git import branch_exists
from jig.jira.models import Issue


def issue_branch_exists(issue: Issue, mode: Optional[BranchMode] = None) -> Optional[str]:
    """Look for a branch previously created for an issue.

    Checks the name synthesized for ``mode`` first, then the bare issue key,
    each locally and on the default remote.

    Args:
        issue: The issue snapshot.
        mode: Naming strategy used to synthesize the candidate name.

    Returns:
        The name of the existing branch, or None.
    """
    candidates = [branch_name_from_issue(issue, mode), str(issue.key)]
    for candidate in dict.fromkeys(candidates):
        if branch_exists(candidate):
            return candidate
    return None
