"""Issue key extraction.

An issue key has the shape PROJECT-NUMBER, where PROJECT is two or more
uppercase ASCII letters and NUMBER is one or more digits (e.g. AB-123).

Contains:
- IssueKey: Normalized issue key value
- MalformedKeyError: Raised when no issue key can be found
- extract_issue_key: Extract the first issue key from text (raises)
- find_issue_key: Extract the first issue key from text (returns None)
"""

import re
from dataclasses import dataclass
from typing import Optional

ISSUE_KEY_RE = re.compile(r"[A-Z]{2,}-[0-9]+")


class MalformedKeyError(ValueError):
    """Raised when a string does not contain a valid issue key."""

    pass


@dataclass(frozen=True)
class IssueKey:
    """A normalized, upper case issue key such as ``AB-123``."""

    value: str

    def __post_init__(self):
        if not ISSUE_KEY_RE.fullmatch(self.value):
            raise MalformedKeyError(f"Malformed issue key supplied: {self.value}")

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)


def find_issue_key(text: str) -> Optional[IssueKey]:
    """Find the first issue key in text.

    Matching is case-insensitive: the input is uppercased before searching,
    so ``ab-12-fix`` yields ``AB-12``.

    Args:
        text: Any string (branch name, commit message, user input).

    Returns:
        The leftmost issue key, or None if there is none.
    """
    match = ISSUE_KEY_RE.search(text.upper())
    if match is None:
        return None
    return IssueKey(match.group(0))


def extract_issue_key(text: str) -> IssueKey:
    """Extract the first issue key in text.

    Args:
        text: Any string (branch name, commit message, user input).

    Returns:
        The leftmost issue key.

    Raises:
        MalformedKeyError: If text contains no issue key.
    """
    key = find_issue_key(text)
    if key is None:
        raise MalformedKeyError(f"Malformed issue key supplied: {text}")
    return key
