"""Branch name synthesis from Jira issues.

A branch name is built from the issue key and summary, made legal for git
refs and bounded to MAX_STEM_LENGTH characters before any suffix.

Contains:
- BranchMode: How the name is derived (short, default, suffix, overwrite)
- sanitize_branch_name: Idempotent ref-name sanitizer
- overwriting_suffixer: Fit a suffix into the length budget
- branch_name_from_issue: Synthesize and self-validate a branch name
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jig.branch.exceptions import UsageConflictError
from jig.jira.models import Issue
from jig.keys import MalformedKeyError, find_issue_key

MAX_STEM_LENGTH = 50
SEPARATOR = "_"

# Characters git rejects in ref names, plus quotes and angle brackets
DISALLOWED_CHARS = (" ", ":", "~", "^", "?", "*", "[", "\\", "'", '"', "<", ">")
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")

LOCK_SUFFIX = ".lock"

# Applied in order, each until the pattern no longer occurs
COLLAPSE_RULES = (
    ("..", "."),
    ("__", "_"),
    ("--", "-"),
    ("${", ""),
    (".lock/", "/"),
    ("@{", "@"),
)

EDGE_CHARS = "./_"


class BranchModeKind(str, Enum):
    """Branch naming strategies."""

    SHORT = "short"
    DEFAULT = "default"
    SUFFIX = "suffix"
    OVERWRITE = "overwrite"


@dataclass(frozen=True)
class BranchMode:
    """How to derive a branch name from an issue.

    Attributes:
        kind: The naming strategy.
        text: Suffix text (SUFFIX) or replacement summary (OVERWRITE).
    """

    kind: BranchModeKind = BranchModeKind.DEFAULT
    text: Optional[str] = None

    @classmethod
    def short(cls) -> "BranchMode":
        return cls(BranchModeKind.SHORT)

    @classmethod
    def default(cls) -> "BranchMode":
        return cls(BranchModeKind.DEFAULT)

    @classmethod
    def with_suffix(cls, suffix: str) -> "BranchMode":
        return cls(BranchModeKind.SUFFIX, suffix)

    @classmethod
    def overwrite(cls, name: str) -> "BranchMode":
        return cls(BranchModeKind.OVERWRITE, name)

    @classmethod
    def from_options(
        cls,
        short: bool = False,
        append: Optional[str] = None,
        name: Optional[str] = None,
    ) -> "BranchMode":
        """Build a mode from CLI options.

        Raises:
            UsageConflictError: If more than one modifier is supplied.
        """
        supplied = [
            flag
            for flag, present in (
                ("--short", short),
                ("--append", append is not None),
                ("--name", name is not None),
            )
            if present
        ]
        if len(supplied) > 1:
            raise UsageConflictError(
                f"Options {', '.join(supplied)} are mutually exclusive"
            )

        if short:
            return cls.short()
        if append is not None:
            return cls.with_suffix(append)
        if name is not None:
            return cls.overwrite(name)
        return cls.default()


def _collapse(text: str, pattern: str, replacement: str) -> str:
    # Each replace pass strictly shortens the string, so len(text) bounds the loop
    for _ in range(len(text) + 1):
        if pattern not in text:
            break
        text = text.replace(pattern, replacement)
    return text


def _sanitize_once(branch: str) -> str:
    for char in DISALLOWED_CHARS:
        branch = branch.replace(char, "_")
    branch = CONTROL_CHARS_RE.sub("_", branch)

    for pattern, replacement in COLLAPSE_RULES:
        branch = _collapse(branch, pattern, replacement)

    # No '/..' survives the '..' collapse above
    branch = branch.replace("/.", "/")
    branch = _collapse(branch, "//", "/")

    branch = branch.strip(EDGE_CHARS)
    if branch.endswith(LOCK_SUFFIX):
        branch = branch[: -len(LOCK_SUFFIX)]
    return branch


def sanitize_branch_name(branch: str) -> str:
    """Make a string legal as a git branch name.

    Replaces disallowed and control characters with underscores, collapses
    repeated '..', '__', '--', '.lock/', removes '${', rewrites '/.' and '//'
    to '/', strips leading and trailing '.', '/' and '_', and drops a
    trailing '.lock'. The whole pass is
    repeated until the result stops changing, so the function is
    idempotent.

    Args:
        branch: Raw branch name candidate.

    Returns:
        The sanitized branch name (possibly empty).
    """
    for _ in range(len(branch) + 1):
        sanitized = _sanitize_once(branch)
        if sanitized == branch:
            break
        branch = sanitized
    return branch


def overwriting_suffixer(branch_name: str, issue_key: str, suffix: str) -> str:
    """Append a suffix while keeping the issue key intact.

    The suffix is shortened first when key + separator + suffix would not
    fit the budget, then the stem is shortened by the overflow. Both cut
    points keep one character past the budget, so the combined name can be
    MAX_STEM_LENGTH + 1 characters long. A stem that is only the key gets a
    separator, so a suffix starting with a digit cannot extend the key.

    Args:
        branch_name: Sanitized and truncated stem.
        issue_key: The issue key the stem starts with.
        suffix: Text to append.

    Returns:
        stem + suffix.
    """
    if branch_name == issue_key:
        branch_name += SEPARATOR

    key_room = len(issue_key) + len(SEPARATOR)
    if key_room + len(suffix) > MAX_STEM_LENGTH:
        suffix = suffix[: max(0, MAX_STEM_LENGTH + 1 - key_room)]

    if len(branch_name) + len(suffix) > MAX_STEM_LENGTH:
        branch_name = branch_name[: MAX_STEM_LENGTH + 1 - len(suffix)]

    return branch_name + suffix


def branch_name_from_issue(issue: Issue, mode: Optional[BranchMode] = None) -> str:
    """Synthesize a branch name for an issue.

    Sanitizes before truncating so the cut lands on meaningful content, and
    sanitizes again afterwards so the cut cannot leave a trailing '.', '/'
    or '_'.

    Args:
        issue: The issue snapshot (key + summary).
        mode: Naming strategy. Defaults to BranchMode.default().

    Returns:
        A git-legal branch name that still starts with the issue key.

    Raises:
        MalformedKeyError: If the issue key cannot be recovered from the
            synthesized name.
    """
    mode = mode or BranchMode.default()
    key = str(issue.key)

    if mode.kind == BranchModeKind.SHORT:
        branch_name = key
    elif mode.kind == BranchModeKind.OVERWRITE:
        branch_name = sanitize_branch_name(f"{key} {mode.text or ''}")
    else:
        stem = sanitize_branch_name(f"{key} {issue.summary}")[:MAX_STEM_LENGTH]
        if mode.kind == BranchModeKind.SUFFIX and mode.text:
            stem = overwriting_suffixer(stem, key, mode.text)
        branch_name = sanitize_branch_name(stem)

    recovered = find_issue_key(branch_name)
    if recovered is None or recovered != issue.key:
        raise MalformedKeyError(
            f"Issue key {key} is not recoverable from branch name '{branch_name}'"
        )
    return branch_name


__all__ = [
    "MAX_STEM_LENGTH",
    "SEPARATOR",
    "BranchMode",
    "BranchModeKind",
    "UsageConflictError",
    "sanitize_branch_name",
    "overwriting_suffixer",
    "branch_name_from_issue",
]
