"""Synchronous Jira REST client.

Contains:
- JiraClient: Thin wrapper over httpx for the endpoints jig uses
"""

from typing import Any, Optional

import httpx

from jig.config import JiraConfig, validate_credentials
from jig.jira.exceptions import EmptyResultError, JiraAuthError, JiraError
from jig.jira.models import (
    CommentRequest,
    Issue,
    SearchResponse,
    Transition,
    User,
    WorklogRequest,
)
from jig.keys import IssueKey
from jig.utils.logging import log_message

API_PREFIX = "/rest/api/latest"
DEFAULT_TIMEOUT = 30.0


def normalize_url(url: str) -> str:
    """Default the scheme to https and drop trailing slashes.

    Args:
        url: URL or bare host name from config.

    Returns:
        Normalized base URL.
    """
    url = url.strip()
    if not url.startswith("http"):
        url = "https://" + url
    return url.rstrip("/")


class JiraClient:
    """Client for the Jira REST API.

    Accepts an optional ``http_client`` so tests can inject an
    ``httpx.Client`` backed by ``httpx.MockTransport``.
    """

    def __init__(self, config: JiraConfig, http_client: Optional[httpx.Client] = None):
        validate_credentials(config)

        self.url = normalize_url(config.url)
        self.max_results = config.max_query_results

        if config.api_token:
            auth = httpx.BasicAuth(config.user_login, config.api_token)
            headers = {}
        else:
            auth = None
            headers = {"Authorization": f"Bearer {config.pat_token}"}
        headers.update({"Accept": "application/json", "Content-Type": "application/json"})

        if http_client is None:
            http_client = httpx.Client(timeout=httpx.Timeout(DEFAULT_TIMEOUT))
        http_client.headers.update(headers)
        if auth is not None:
            http_client.auth = auth
        self._client = http_client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "JiraClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send a request and translate transport and status errors.

        Args:
            method: HTTP method.
            path: Path below the API prefix (e.g. "/search").
            **kwargs: Passed through to httpx.

        Returns:
            The successful response.

        Raises:
            JiraAuthError: On 401/403.
            JiraError: On any other HTTP or transport failure.
        """
        url = f"{self.url}{API_PREFIX}{path}"
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise JiraError(f"{method} {url} failed: {e}")

        log_message(f"JIRA: {method} {path} | STATUS: {response.status_code}")

        if response.status_code in (401, 403):
            raise JiraAuthError(
                f"Jira rejected the credentials ({response.status_code}). "
                "Check api_token/pat_token in your config."
            )
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise JiraError(f"{method} {path} returned {response.status_code}: {response.text}") from e
        return response

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise JiraError(f"Failed parsing Jira response: {e}") from e

    def browse_url(self, issue_key: IssueKey) -> str:
        """Web URL of an issue."""
        return f"{self.url}/browse/{issue_key}"

    def search(self, jql: str, fields: Optional[list[str]] = None) -> dict:
        """Run a JQL search and return the raw response body."""
        body = {
            "jql": jql,
            "startAt": 0,
            "maxResults": self.max_results,
            "fields": fields or ["summary"],
        }
        return self._json(self._request("POST", "/search", json=body))

    def query_issues(self, jql: str) -> list[Issue]:
        """Run a JQL search for issue summaries.

        Raises:
            EmptyResultError: If the query matched no issues.
        """
        result = SearchResponse.model_validate(self.search(jql))
        if not result.issues:
            raise EmptyResultError("List of issues is empty")
        return result.issues

    def get_issue(self, issue_key: IssueKey) -> Issue:
        """Fetch a single issue's key and summary."""
        issues = self.query_issues(f"issuekey = {issue_key}")
        return issues[0]

    def post_comment(self, issue_key: IssueKey, comment: str) -> None:
        body = CommentRequest(body=comment)
        self._request("POST", f"/issue/{issue_key}/comment", json=body.model_dump())

    def post_worklog(self, issue_key: IssueKey, worklog: WorklogRequest) -> None:
        self._request(
            "POST",
            f"/issue/{issue_key}/worklog",
            json=worklog.model_dump(by_alias=True),
        )

    def get_transitions(self, issue_key: IssueKey) -> list[Transition]:
        """List transitions available on an issue.

        Raises:
            EmptyResultError: If no transitions are available.
        """
        response = self._request(
            "GET",
            f"/issue/{issue_key}/transitions",
            params={"expand": "transitions.fields"},
        )
        transitions = [
            Transition.model_validate(t) for t in self._json(response).get("transitions", [])
        ]
        if not transitions:
            raise EmptyResultError("List of transitions is empty")
        return transitions

    def post_transition(self, issue_key: IssueKey, transition: Transition) -> None:
        self._request(
            "POST",
            f"/issue/{issue_key}/transitions",
            json={"transition": {"id": transition.id}},
        )

    def get_assignable_users(self, issue_key: IssueKey, search: str) -> list[User]:
        """Search users that can be assigned to an issue."""
        response = self._request(
            "GET",
            "/user/assignable/search",
            params={
                "issueKey": str(issue_key),
                "username": search,
                "query": search,
                "maxResults": self.max_results,
            },
        )
        return [User.model_validate(u) for u in self._json(response)]

    def assign_user(self, issue_key: IssueKey, user: User) -> None:
        self._request("PUT", f"/issue/{issue_key}/assignee", json=user.assign_body())
