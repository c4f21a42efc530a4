"""Data models for the Jira REST API.

Contains:
- Issue, IssueFields: Read-only ticket snapshot (key + summary)
- Transition: Workflow transition available on an issue
- User: Assignable Jira user
- WorklogDuration: Time spent ("1.5h", "30m") converted to seconds
- SearchResponse: Parsed JQL search result
- WorklogRequest, CommentRequest: Request bodies
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jig.keys import IssueKey, MalformedKeyError, extract_issue_key

WORKLOG_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)([WwDdHhMm]?)")

# Seconds per unit; a day is 8 hours and a week 5 days, as in Jira Cloud
UNIT_SECONDS = {"m": 60, "h": 3600, "d": 3600 * 8, "w": 3600 * 8 * 5, "": 60}


class IssueFields(BaseModel):
    """The subset of issue fields jig requests."""

    model_config = ConfigDict(frozen=True)

    summary: str = ""


class Issue(BaseModel):
    """A read-only snapshot of a Jira issue.

    Attributes:
        key: The issue key (e.g., AB-123).
        fields: Requested issue fields; only the summary is used.
        id: Jira's internal issue id.
        self_url: REST URL of the issue (``self`` in the response).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    key: IssueKey
    fields: IssueFields = IssueFields()
    id: str = ""
    self_url: str = Field(default="", alias="self")

    @field_validator("key", mode="before")
    @classmethod
    def parse_key(cls, v):
        """Accept plain strings for the issue key."""
        if isinstance(v, IssueKey):
            return v
        return extract_issue_key(str(v))

    @classmethod
    def from_key(cls, key: IssueKey, summary: str = "") -> "Issue":
        """Build an issue snapshot without querying Jira."""
        return cls(key=key, fields=IssueFields(summary=summary))

    @property
    def summary(self) -> str:
        return self.fields.summary

    def __str__(self) -> str:
        return f"{self.key} {self.fields.summary}"


class SearchResponse(BaseModel):
    """Response body of POST /search."""

    issues: list[Issue] = []
    total: int = 0
    start_at: int = Field(default=0, alias="startAt")
    max_results: int = Field(default=0, alias="maxResults")


class TransitionField(BaseModel):
    """A field required or allowed while performing a transition."""

    required: bool = False
    name: str = ""
    operations: list[str] = []
    allowed_values: Optional[list] = Field(default=None, alias="allowedValues")


class Transition(BaseModel):
    """A workflow transition available on an issue."""

    id: str
    name: str
    fields: dict[str, TransitionField] = {}

    def __str__(self) -> str:
        return self.name


class User(BaseModel):
    """An assignable Jira user.

    Jira Server identifies users by ``name``; Jira Cloud by ``accountId``.
    """

    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(default="", alias="displayName")
    name: Optional[str] = None
    account_id: Optional[str] = Field(default=None, alias="accountId")
    email_address: Optional[str] = Field(default=None, alias="emailAddress")
    active: bool = True

    def assign_body(self) -> dict:
        """Request body for PUT /issue/{key}/assignee."""
        if self.account_id:
            return {"accountId": self.account_id}
        return {"name": self.name}

    def __str__(self) -> str:
        return f"{self.display_name}: {self.account_id or self.name}"


class WorklogDuration(str):
    """A worklog duration, stored as whole seconds.

    Accepts ``30m``, ``2h``, ``1.5d``, ``1w`` (case-insensitive); a bare
    number is minutes.
    """

    def __new__(cls, value: str):
        match = WORKLOG_RE.search(value)
        if match is None:
            raise ValueError(f"Malformed worklog duration: {value}")
        amount, unit = match.groups()
        seconds = float(amount) * UNIT_SECONDS[unit.lower()]
        return super().__new__(cls, f"{seconds:.0f}")

    @property
    def seconds(self) -> int:
        return int(self)


class WorklogRequest(BaseModel):
    """Request body for POST /issue/{key}/worklog."""

    comment: str = ""
    started: str
    time_spent_seconds: str = Field(serialization_alias="timeSpentSeconds")


class CommentRequest(BaseModel):
    """Request body for POST /issue/{key}/comment."""

    body: str


__all__ = [
    "Issue",
    "IssueFields",
    "SearchResponse",
    "Transition",
    "TransitionField",
    "User",
    "WorklogDuration",
    "WorklogRequest",
    "CommentRequest",
    "MalformedKeyError",
]
