"""Tests for jig.jira client and models."""

import json

import httpx
import pytest

from jig.config import ConfigError, JiraConfig
from jig.jira import (
    EmptyResultError,
    Issue,
    JiraAuthError,
    JiraError,
    Transition,
    User,
    WorklogDuration,
    WorklogRequest,
    normalize_url,
)
from jig.keys import IssueKey

SEARCH_RESPONSE = {
    "startAt": 0,
    "maxResults": 15,
    "total": 2,
    "issues": [
        {"id": "10001", "key": "AB-1", "self": "https://x/1", "fields": {"summary": "First issue"}},
        {"id": "10002", "key": "AB-2", "self": "https://x/2", "fields": {"summary": "Second issue"}},
    ],
}


def _json_response(data, status_code=200):
    return lambda request: httpx.Response(status_code, json=data)


class TestNormalizeUrl:
    """Tests for normalize_url function."""

    def test_adds_scheme(self):
        """Test that https is the default scheme."""
        assert normalize_url("jira.example.com") == "https://jira.example.com"

    def test_keeps_scheme_and_strips_slash(self):
        """Test an explicit scheme with trailing slashes."""
        assert normalize_url("http://jira.local//") == "http://jira.local"


class TestJiraClientSetup:
    """Tests for JiraClient construction."""

    def test_basic_auth_for_api_token(self, make_client):
        """Test that api tokens use basic auth."""
        client = make_client(_json_response(SEARCH_RESPONSE))
        client.query_issues("project = AB")

        auth_header = client.requests[0].headers["Authorization"]
        assert auth_header.startswith("Basic ")

    def test_bearer_for_pat(self, make_client):
        """Test that personal access tokens use a bearer header."""
        jira = JiraConfig(url="https://jira.local", pat_token="pat-123")
        client = make_client(_json_response(SEARCH_RESPONSE), jira=jira)
        client.query_issues("project = AB")

        assert client.requests[0].headers["Authorization"] == "Bearer pat-123"
        assert str(client.requests[0].url).startswith("https://jira.local/rest/api/latest/")

    def test_invalid_credentials_rejected(self):
        """Test that credentials are validated on construction."""
        from jig.jira import JiraClient

        with pytest.raises(ConfigError):
            JiraClient(JiraConfig(url="https://jira.local"))


class TestQueryIssues:
    """Tests for issue search."""

    def test_returns_issues(self, make_client):
        """Test parsing a search response."""
        client = make_client(_json_response(SEARCH_RESPONSE))

        issues = client.query_issues("assignee = currentUser()")

        assert [i.key for i in issues] == [IssueKey("AB-1"), IssueKey("AB-2")]
        assert issues[0].summary == "First issue"
        assert str(issues[1]) == "AB-2 Second issue"

    def test_request_body(self, make_client):
        """Test the JQL search request."""
        client = make_client(_json_response(SEARCH_RESPONSE))

        client.query_issues("project = AB")

        request = client.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/rest/api/latest/search"
        assert json.loads(request.content) == {
            "jql": "project = AB",
            "startAt": 0,
            "maxResults": 15,
            "fields": ["summary"],
        }

    def test_empty_result(self, make_client):
        """Test that an empty search is an EmptyResultError."""
        client = make_client(_json_response({"issues": [], "total": 0}))

        with pytest.raises(EmptyResultError):
            client.query_issues("project = NONE")

    def test_get_issue(self, make_client):
        """Test fetching a single issue by key."""
        client = make_client(_json_response({"issues": SEARCH_RESPONSE["issues"][:1]}))

        issue = client.get_issue(IssueKey("AB-1"))

        assert issue.key == IssueKey("AB-1")
        assert json.loads(client.requests[0].content)["jql"] == "issuekey = AB-1"


class TestErrors:
    """Tests for HTTP error translation."""

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_errors(self, make_client, status):
        """Test that rejected credentials raise JiraAuthError."""
        client = make_client(_json_response({}, status_code=status))

        with pytest.raises(JiraAuthError):
            client.query_issues("x")

    def test_server_error(self, make_client):
        """Test that other failures raise JiraError."""
        client = make_client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(JiraError) as exc_info:
            client.query_issues("x")

        assert "500" in str(exc_info.value)

    def test_transport_error(self, make_client):
        """Test that connection failures raise JiraError."""

        def _fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(_fail)

        with pytest.raises(JiraError) as exc_info:
            client.query_issues("x")

        assert "connection refused" in str(exc_info.value)

    def test_error_hierarchy(self):
        """Test that specific errors derive from JiraError."""
        assert issubclass(JiraAuthError, JiraError)
        assert issubclass(EmptyResultError, JiraError)


class TestIssueActions:
    """Tests for comment, worklog, transition and assign endpoints."""

    def test_post_comment(self, make_client):
        """Test posting a comment."""
        client = make_client(_json_response({"id": "1"}, status_code=201))

        client.post_comment(IssueKey("AB-1"), "Looks good")

        request = client.requests[0]
        assert request.url.path == "/rest/api/latest/issue/AB-1/comment"
        assert json.loads(request.content) == {"body": "Looks good"}

    def test_post_worklog(self, make_client):
        """Test posting a worklog with camelCase keys."""
        client = make_client(_json_response({}, status_code=201))
        worklog = WorklogRequest(
            comment="pairing",
            started="2024-05-01T10:00:00.000+0200",
            time_spent_seconds=WorklogDuration("1.5h"),
        )

        client.post_worklog(IssueKey("AB-1"), worklog)

        assert json.loads(client.requests[0].content) == {
            "comment": "pairing",
            "started": "2024-05-01T10:00:00.000+0200",
            "timeSpentSeconds": "5400",
        }

    def test_get_transitions(self, make_client):
        """Test listing transitions with their fields expanded."""
        client = make_client(_json_response({
            "transitions": [
                {"id": "11", "name": "In Progress", "fields": {}},
                {"id": "21", "name": "Done", "fields": {"resolution": {"required": True, "name": "Resolution"}}},
            ]
        }))

        transitions = client.get_transitions(IssueKey("AB-1"))

        assert [str(t) for t in transitions] == ["In Progress", "Done"]
        assert transitions[1].fields["resolution"].required is True
        assert client.requests[0].url.params["expand"] == "transitions.fields"

    def test_no_transitions(self, make_client):
        """Test that an issue without transitions is an error."""
        client = make_client(_json_response({"transitions": []}))

        with pytest.raises(EmptyResultError):
            client.get_transitions(IssueKey("AB-1"))

    def test_post_transition(self, make_client):
        """Test performing a transition."""
        client = make_client(lambda request: httpx.Response(204))

        client.post_transition(IssueKey("AB-1"), Transition(id="21", name="Done"))

        assert json.loads(client.requests[0].content) == {"transition": {"id": "21"}}

    def test_assignable_users(self, make_client):
        """Test user search and assignment."""
        client = make_client(_json_response([
            {"displayName": "Ada Lovelace", "accountId": "abc"},
        ]))

        users = client.get_assignable_users(IssueKey("AB-1"), "ada")

        assert users[0].display_name == "Ada Lovelace"
        assert client.requests[0].url.params["issueKey"] == "AB-1"

    def test_assign_user(self, make_client):
        """Test the assignee request body."""
        client = make_client(lambda request: httpx.Response(204))

        client.assign_user(IssueKey("AB-1"), User(display_name="Ada", account_id="abc"))

        request = client.requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/rest/api/latest/issue/AB-1/assignee"
        assert json.loads(request.content) == {"accountId": "abc"}

    def test_browse_url(self, make_client):
        """Test the web link to an issue."""
        client = make_client(_json_response({}))

        assert client.browse_url(IssueKey("AB-1")) == "https://jira.example.com/browse/AB-1"


class TestModels:
    """Tests for Jira data models."""

    def test_issue_from_string_key(self):
        """Test that issue keys are parsed and normalized."""
        issue = Issue.model_validate({"key": "ab-5", "fields": {"summary": "s"}})
        assert issue.key == IssueKey("AB-5")

    def test_server_user_assign_body(self):
        """Test that Jira Server users are assigned by name."""
        assert User(name="ada").assign_body() == {"name": "ada"}

    @pytest.mark.parametrize(
        "text, seconds",
        [
            ("30m", 1800),
            ("2h", 7200),
            ("12h", 43200),
            ("1.5d", 43200),
            ("1w", 144000),
            ("45", 2700),
            ("2H", 7200),
        ],
    )
    def test_worklog_duration(self, text, seconds):
        """Test duration parsing and unit conversion."""
        assert WorklogDuration(text).seconds == seconds

    def test_worklog_duration_invalid(self):
        """Test that text without a number is rejected."""
        with pytest.raises(ValueError):
            WorklogDuration("soon")
