"""Tests for jig.interactivity module."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from jig.config import Config
from jig.interactivity import (
    SelectionAborted,
    format_started,
    issue_from_branch_or_prompt,
    prompt_date,
    prompt_select,
    query_issue_details,
    query_issues_with_retry,
    select_issue_key,
)
from jig.jira import EmptyResultError, Issue, JiraError
from jig.keys import IssueKey

ISSUES = [
    Issue.from_key(IssueKey("AB-1"), "First"),
    Issue.from_key(IssueKey("AB-2"), "Second"),
]


class TestPromptSelect:
    """Tests for prompt_select function."""

    def test_returns_chosen_option(self, mocker):
        """Test picking the second entry."""
        mocker.patch("typer.prompt", return_value="2")

        assert prompt_select("Jira issue:", ISSUES) == ISSUES[1]

    def test_lists_options_on_stderr(self, mocker, capsys):
        """Test that options are numbered."""
        mocker.patch("typer.prompt", return_value="1")

        prompt_select("Jira issue:", ISSUES)

        err = capsys.readouterr().err
        assert "1. AB-1 First" in err
        assert "2. AB-2 Second" in err

    @pytest.mark.parametrize("choice", ["0", "3", "abc"])
    def test_invalid_choice(self, mocker, choice):
        """Test that out-of-range or non-numeric answers abort."""
        mocker.patch("typer.prompt", return_value=choice)

        with pytest.raises(SelectionAborted):
            prompt_select("Jira issue:", ISSUES)

    @pytest.mark.parametrize("answer", ["", "   "])
    def test_empty_answer_aborts(self, mocker, answer):
        """Test that pressing Enter does not pick the first option."""
        mock_prompt = mocker.patch("typer.prompt", return_value=answer)

        with pytest.raises(SelectionAborted):
            prompt_select("Jira issue:", ISSUES)

        assert mock_prompt.call_args.kwargs["default"] == ""

    def test_empty_options(self):
        """Test that nothing to choose from aborts."""
        with pytest.raises(SelectionAborted):
            prompt_select("Jira issue:", [])


class TestQueries:
    """Tests for the query helpers."""

    def test_query_issue_details(self):
        """Test fetching a single issue."""
        client = MagicMock()
        client.get_issue.return_value = ISSUES[0]

        assert query_issue_details(client, IssueKey("AB-1")) == ISSUES[0]

    def test_query_issue_details_not_found(self):
        """Test the error for unknown keys."""
        client = MagicMock()
        client.get_issue.side_effect = EmptyResultError("List of issues is empty")

        with pytest.raises(JiraError) as exc_info:
            query_issue_details(client, IssueKey("AB-404"))

        assert "AB-404" in str(exc_info.value)

    def test_first_query_succeeds(self):
        """Test that the retry query is not used when not needed."""
        client = MagicMock()
        client.query_issues.return_value = ISSUES

        assert query_issues_with_retry(client, Config()) == ISSUES
        client.query_issues.assert_called_once_with(Config().issue_query)

    def test_falls_back_to_retry_query(self):
        """Test the retry on an empty first query."""
        client = MagicMock()
        client.query_issues.side_effect = [EmptyResultError("empty"), ISSUES]
        config = Config(issue_query="first", retry_query="second")

        assert query_issues_with_retry(client, config) == ISSUES
        assert [c.args[0] for c in client.query_issues.call_args_list] == ["first", "second"]

    def test_both_queries_fail(self):
        """Test the error when the retry also fails."""
        client = MagicMock()
        client.query_issues.side_effect = [JiraError("bad jql"), EmptyResultError("empty")]

        with pytest.raises(JiraError) as exc_info:
            query_issues_with_retry(client, Config())

        assert "Retry query failed" in str(exc_info.value)


class TestIssueFromBranchOrPrompt:
    """Tests for issue_from_branch_or_prompt function."""

    def test_key_from_branch(self):
        """Test that the branch key is looked up without prompting."""
        client = MagicMock()
        client.get_issue.return_value = ISSUES[0]

        assert issue_from_branch_or_prompt(client, Config(), "AB-1_First") == ISSUES[0]
        client.get_issue.assert_called_once_with(IssueKey("AB-1"))
        client.query_issues.assert_not_called()

    @pytest.mark.parametrize("head", ["main", None])
    def test_prompts_without_key(self, mocker, head):
        """Test the prompt when the branch carries no key."""
        client = MagicMock()
        client.query_issues.return_value = ISSUES
        mocker.patch("typer.prompt", return_value="2")

        assert issue_from_branch_or_prompt(client, Config(), head) == ISSUES[1]


class TestSelectIssueKey:
    """Tests for select_issue_key function."""

    def test_returns_selected_key(self, mocker, config):
        """Test the hook fallback picker."""
        client = MagicMock()
        client.__enter__.return_value = client
        client.query_issues.return_value = ISSUES
        mocker.patch("jig.interactivity.JiraClient", return_value=client)
        mocker.patch("typer.prompt", return_value="1")

        assert select_issue_key(config) == IssueKey("AB-1")


class TestPromptDate:
    """Tests for prompt_date function."""

    def test_format(self):
        """Test the Jira timestamp format."""
        when = datetime.fromisoformat("2024-05-01T10:20:30+02:00")
        assert format_started(when) == "2024-05-01T10:20:30.000+0200"

    def test_no_prompt(self, mocker):
        """Test that the current time is used when not confirming."""
        mock_prompt = mocker.patch("typer.prompt")

        started = prompt_date(Config(always_confirm_date=False))

        mock_prompt.assert_not_called()
        assert started.startswith(datetime.now().strftime("%Y-%m-%d"))

    def test_prompted_date(self, mocker):
        """Test that the chosen date replaces today's."""
        mocker.patch("typer.prompt", return_value="2023-12-24")

        started = prompt_date(Config(always_confirm_date=True))

        assert started.startswith("2023-12-24T")

    def test_toggle_inverts_setting(self, mocker):
        """Test that --date inverts always_confirm_date."""
        mock_prompt = mocker.patch("typer.prompt", return_value="2023-12-24")

        prompt_date(Config(always_confirm_date=True), toggle_prompt=True)
        mock_prompt.assert_not_called()

        assert prompt_date(Config(always_confirm_date=False), toggle_prompt=True).startswith("2023-12-24")

    def test_invalid_date(self, mocker):
        """Test that unparsable dates abort."""
        mocker.patch("typer.prompt", return_value="24/12/2023")

        with pytest.raises(SelectionAborted):
            prompt_date(Config(always_confirm_date=True))
