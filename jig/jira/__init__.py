"""Jira REST client package for jig.

This package provides:
- exceptions: JiraError, JiraAuthError, EmptyResultError
- models: Issue, Transition, User, WorklogDuration and request bodies
- client: JiraClient
"""

from jig.jira.exceptions import (
    EmptyResultError,
    JiraAuthError,
    JiraError,
)
from jig.jira.models import (
    Issue,
    IssueFields,
    Transition,
    User,
    WorklogDuration,
    WorklogRequest,
)
from jig.jira.client import JiraClient, normalize_url


__all__ = [
    "JiraError",
    "JiraAuthError",
    "EmptyResultError",
    "Issue",
    "IssueFields",
    "Transition",
    "User",
    "WorklogDuration",
    "WorklogRequest",
    "JiraClient",
    "normalize_url",
]
