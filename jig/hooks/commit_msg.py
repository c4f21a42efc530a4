"""commit-msg hook: prefix every commit message with the branch's issue key.

The hook decides between passing a message through, correcting it, or
rejecting it. Guards run first (empty branch, detached HEAD during rebase,
boilerplate fixup/squash/revert/merge messages); the remaining cases are an
ordered decision table over the branch key, the message key and the hook
settings.
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from jig.config import Config, HooksConfig
from jig.git import DETACHED_HEAD, get_branch
from jig.hooks.exceptions import (
    BranchStateError,
    ConformanceError,
    KeyMismatchError,
    MissingKeyError,
)
from jig.keys import IssueKey, find_issue_key
from jig.utils.logging import log_message

HOOK_NAME = "commit-msg"

# The keyword must be a whole word: "Mergesort ..." is an ordinary message
BOILERPLATE_RE = re.compile(r"^(squash|fixup|amend|revert|Revert|Merge)(!|\s|$)")
CONFORMANCE_RE = re.compile(r"^[A-Z]{2,}-[0-9]+ [A-Z0-9].*$", re.MULTILINE)

IssueSelector = Callable[[], IssueKey]


class CommitCase(str, Enum):
    """Outcomes of the commit message decision table."""

    PREFIX_BRANCH_KEY = "prefix_branch_key"
    NORMALIZE_LEADING_KEY = "normalize_leading_key"
    MOVE_KEY_TO_FRONT = "move_key_to_front"
    ADOPT_MESSAGE_KEY = "adopt_message_key"
    SELECT_KEY = "select_key"
    REJECT_MISMATCH = "reject_mismatch"
    REJECT_MISSING = "reject_missing"


@dataclass(frozen=True)
class CommitFacts:
    """Everything the decision table looks at."""

    branch_key: bool
    message_key: bool
    keys_equal: bool
    key_leading: bool
    allow_missing: bool
    allow_mismatch: bool


ANY = None

# Columns: branch key, message key, keys equal, message starts with key,
# allow_branch_missing_issue_key, allow_branch_and_commit_msg_mismatch.
# First matching row wins.
DECISION_TABLE: tuple[tuple[tuple[Optional[bool], ...], CommitCase], ...] = (
    ((True, False, ANY, ANY, ANY, ANY), CommitCase.PREFIX_BRANCH_KEY),
    ((True, True, False, ANY, ANY, False), CommitCase.REJECT_MISMATCH),
    ((True, True, False, ANY, ANY, True), CommitCase.ADOPT_MESSAGE_KEY),
    ((True, True, True, True, ANY, ANY), CommitCase.NORMALIZE_LEADING_KEY),
    ((True, True, True, False, ANY, ANY), CommitCase.MOVE_KEY_TO_FRONT),
    ((False, ANY, ANY, ANY, False, ANY), CommitCase.REJECT_MISSING),
    ((False, True, ANY, ANY, True, ANY), CommitCase.ADOPT_MESSAGE_KEY),
    ((False, False, ANY, ANY, True, ANY), CommitCase.SELECT_KEY),
)


def classify(facts: CommitFacts) -> CommitCase:
    """Look up the decision table row matching the facts."""
    values = (
        facts.branch_key,
        facts.message_key,
        facts.keys_equal,
        facts.key_leading,
        facts.allow_missing,
        facts.allow_mismatch,
    )
    for pattern, case in DECISION_TABLE:
        if all(p is ANY or p == v for p, v in zip(pattern, values)):
            return case
    raise AssertionError(f"No decision table row for {facts}")


def is_boilerplate(message: str) -> bool:
    """Check for messages generated by git tooling (fixup!, squash!, Revert, Merge)."""
    return BOILERPLATE_RE.match(message) is not None


def _leading_key_match(message: str, key: IssueKey) -> Optional[re.Match]:
    return re.match(rf"{re.escape(str(key))}(?![0-9])[:\s]*", message, re.IGNORECASE)


def strip_leading_key(message: str, key: IssueKey) -> str:
    """Remove the key and any following colon/whitespace from the start."""
    match = _leading_key_match(message, key)
    if match is None:
        return message
    return message[match.end():]


def remove_key(message: str, key: IssueKey) -> str:
    """Remove every occurrence of key (optionally bracketed) from the message.

    Only lines that contained the key are tidied up; all other lines,
    including body indentation and the trailing newline, are kept verbatim.
    """
    pattern = re.compile(rf"[\[(]?{re.escape(str(key))}(?![0-9])[\])]?:?", re.IGNORECASE)
    lines = message.split("\n")
    for i, line in enumerate(lines):
        removed = pattern.sub("", line)
        if removed == line:
            continue
        indent = line[: len(line) - len(line.lstrip())]
        lines[i] = indent + re.sub(r"[ \t]{2,}", " ", removed).strip()
    return "\n".join(lines).lstrip()


def normalize_key(message: str, key: IssueKey) -> str:
    """Take key out of the message wherever it is, leaving the body."""
    if _leading_key_match(message, key) is not None:
        return strip_leading_key(message, key)
    return remove_key(message, key)


def capitalize_first(body: str) -> str:
    """Upper-case the first character if it is a lowercase ASCII letter."""
    if body and body[0].isascii() and body[0].islower():
        return body[0].upper() + body[1:]
    return body


def validate_commit_message(
    branch: str,
    message: str,
    settings: HooksConfig,
    select_issue_key: Optional[IssueSelector] = None,
) -> str:
    """Validate a draft commit message and return the corrected version.

    Args:
        branch: Current branch name ('HEAD' when detached).
        message: Raw commit message as written by git.
        settings: Hook settings from config.
        select_issue_key: Called to pick an issue when neither branch nor
            message carries a key and that is allowed.

    Returns:
        The corrected message, or the message unchanged for passthrough
        cases (rebase, boilerplate).

    Raises:
        BranchStateError: If branch is empty.
        KeyMismatchError: If branch and message keys differ.
        MissingKeyError: If the branch has no key.
        ConformanceError: If the result fails the final format check.
    """
    if not branch:
        raise BranchStateError("Branch is empty, cannot infer commit issue key")
    if branch == DETACHED_HEAD:
        log_message("commit-msg: detached HEAD, passing message through")
        return message
    if is_boilerplate(message):
        log_message("commit-msg: boilerplate message, passing through")
        return message

    branch_key = find_issue_key(branch)
    message_key = find_issue_key(message)

    facts = CommitFacts(
        branch_key=branch_key is not None,
        message_key=message_key is not None,
        keys_equal=branch_key is not None and branch_key == message_key,
        key_leading=message_key is not None
        and _leading_key_match(message, message_key) is not None,
        allow_missing=settings.allow_branch_missing_issue_key,
        allow_mismatch=settings.allow_branch_and_commit_msg_mismatch,
    )
    case = classify(facts)
    log_message(f"commit-msg: branch={branch!r} branch_key={branch_key} "
                f"message_key={message_key} case={case.value}")

    if case == CommitCase.REJECT_MISMATCH:
        raise KeyMismatchError(
            f"Issue key in commit message does not match '{branch_key}' in the branch name!"
        )
    if case == CommitCase.REJECT_MISSING:
        raise MissingKeyError(
            "Issue key not found in branch name, create branches with: jig branch"
        )

    if case == CommitCase.PREFIX_BRANCH_KEY:
        key, body = branch_key, message
    elif case == CommitCase.NORMALIZE_LEADING_KEY:
        key, body = message_key, strip_leading_key(message, message_key)
    elif case == CommitCase.MOVE_KEY_TO_FRONT:
        key, body = message_key, remove_key(message, message_key)
    elif case == CommitCase.ADOPT_MESSAGE_KEY:
        key, body = message_key, normalize_key(message, message_key)
    else:
        if select_issue_key is None:
            raise MissingKeyError("Issue key not found in branch or commit message")
        key, body = select_issue_key(), message

    final_msg = f"{key} {capitalize_first(body)}"

    # Final sanity check
    if not CONFORMANCE_RE.match(final_msg):
        raise ConformanceError(
            f"Commit message not conforming to regex: '{CONFORMANCE_RE.pattern}'"
        )
    return final_msg


def run_commit_msg_hook(
    commit_msg_file: Path,
    config: Config,
    branch: Optional[str] = None,
    select_issue_key: Optional[IssueSelector] = None,
) -> str:
    """Run the commit-msg hook against a message file.

    The file is overwritten only when validation succeeds and the message
    changed.

    Args:
        commit_msg_file: Path git passed as the first hook argument.
        config: Loaded jig configuration.
        branch: Branch name override; read from git when None.
        select_issue_key: Issue picker for the missing-key fallback.

    Returns:
        The final commit message.
    """
    message = commit_msg_file.read_text()
    if branch is None:
        branch = get_branch()

    final_msg = validate_commit_message(branch, message, config.hooks, select_issue_key)
    if final_msg != message:
        commit_msg_file.write_text(final_msg)
    return final_msg


def is_git_hook(argv0: str) -> bool:
    """Check whether jig was invoked through the commit-msg hook symlink."""
    return Path(argv0).name == HOOK_NAME
