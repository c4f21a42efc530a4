"""Jira-related exception classes.

Contains all exception classes for Jira operations:
- JiraError: Base exception for Jira-related errors
- JiraAuthError: Raised when credentials are rejected
- EmptyResultError: Raised when a query returns nothing usable
"""


class JiraError(Exception):
    """Base exception for Jira-related errors."""

    pass


class JiraAuthError(JiraError):
    """Raised when Jira rejects the configured credentials."""

    pass


class EmptyResultError(JiraError):
    """Raised when a query returns an empty list of issues, transitions or users."""

    pass
