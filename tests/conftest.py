"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import httpx
import pytest

from jig.config import Config, JiraConfig
from jig.jira import JiraClient
from jig.utils.logging import reset_logging


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep logging disabled and the logger cache clean between tests."""
    monkeypatch.delenv("JIG_LOG", raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_repo_root(temp_dir):
    """Create a mock git repository root directory."""
    # Create .git directory to simulate a git repo
    git_dir = temp_dir / ".git"
    git_dir.mkdir()
    return temp_dir


@pytest.fixture
def config_dir(temp_dir, mocker):
    """Point the global config directory at a temporary location."""
    global_dir = temp_dir / "global"
    mocker.patch("jig.config._CONFIG_DIR", global_dir)
    return global_dir


@pytest.fixture
def jira_config():
    """Jira settings with api token credentials."""
    return JiraConfig(
        url="jira.example.com",
        user_login="dev@example.com",
        api_token="secret",
        max_query_results=15,
    )


@pytest.fixture
def config(jira_config):
    """A full config using the api token Jira settings."""
    return Config(jira=jira_config)


@pytest.fixture
def make_client(jira_config):
    """Build a JiraClient whose transport is served by a handler function.

    Every request is recorded in the returned client's ``requests`` list.
    """

    def _make(handler, jira=None):
        requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = JiraClient(
            jira or jira_config,
            http_client=httpx.Client(transport=httpx.MockTransport(_record)),
        )
        client.requests = requests
        return client

    return _make
