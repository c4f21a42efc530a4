"""Configuration management for jig.

Configuration is read from two YAML files and merged, workspace over global:
- Global: $XDG_CONFIG_HOME/jig/config.yaml (default ~/.config/jig/config.yaml)
- Workspace: <repo root>/.jig.yaml

Credentials may also come from the environment (or a .env file):
JIG_USER_LOGIN, JIG_API_TOKEN, JIG_PAT_TOKEN.
"""

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


DEFAULT_ISSUE_QUERY = "assignee = currentUser() ORDER BY updated DESC"
DEFAULT_RETRY_QUERY = "reporter = currentUser() ORDER BY updated DESC"
WORKSPACE_CONFIG_NAME = ".jig.yaml"
MERGE_DEPTH = 3

_CREDENTIAL_ENV_VARS = {
    "user_login": "JIG_USER_LOGIN",
    "api_token": "JIG_API_TOKEN",
    "pat_token": "JIG_PAT_TOKEN",
}


@dataclass
class JiraConfig:
    """Connection settings for the Jira REST API."""

    url: str = ""
    user_login: Optional[str] = None
    api_token: Optional[str] = None
    pat_token: Optional[str] = None
    max_query_results: int = 15


@dataclass
class HooksConfig:
    """Settings consumed by the commit-msg hook."""

    allow_branch_missing_issue_key: bool = False
    allow_branch_and_commit_msg_mismatch: bool = False


@dataclass
class Config:
    """Merged jig configuration."""

    jira: JiraConfig = field(default_factory=JiraConfig)
    hooks: HooksConfig = field(default_factory=HooksConfig)
    issue_query: str = DEFAULT_ISSUE_QUERY
    retry_query: str = DEFAULT_RETRY_QUERY
    always_confirm_date: bool = True
    always_short_branch_names: bool = False
    enable_comment_prompts: bool = False
    one_transition_auto_move: bool = False


def _config_home() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else Path.home() / ".config"


_CONFIG_DIR = _config_home() / "jig"


def get_global_config_dir() -> Path:
    """Get the global jig configuration directory."""
    return _CONFIG_DIR


def get_global_config_file() -> Path:
    """Get path to the global config.yaml file."""
    return get_global_config_dir() / "config.yaml"


def find_workspace(start: Optional[Path] = None) -> tuple[Path, bool]:
    """Search parent folders for the first directory containing ``.git``.

    Args:
        start: Directory to start from. Defaults to the current directory.

    Returns:
        Tuple of (directory, is_repo). When no repository is found the
        starting directory is returned with is_repo False.
    """
    current = (start or Path.cwd()).resolve()
    for ancestor in [current, *current.parents]:
        if (ancestor / ".git").exists():
            return ancestor, True
    return current, False


def get_workspace_config_file(start: Optional[Path] = None) -> Path:
    """Get path to the workspace .jig.yaml file."""
    workspace, _ = find_workspace(start)
    return workspace / WORKSPACE_CONFIG_NAME


def merge_dicts(left: dict, right: dict, depth: int = MERGE_DEPTH) -> dict:
    """Recursively merge two config dictionaries, right taking precedence.

    Nested dictionaries are merged up to ``depth`` levels; below that, and
    for any non-dict value, the right value replaces the left one.

    Args:
        left: Base dictionary (global config).
        right: Overriding dictionary (workspace config).
        depth: Remaining merge depth.

    Returns:
        A new merged dictionary.
    """
    if depth <= 0:
        return dict(right)

    merged = dict(left)
    for key, rvalue in right.items():
        lvalue = merged.get(key)
        if isinstance(lvalue, dict) and isinstance(rvalue, dict):
            merged[key] = merge_dicts(lvalue, rvalue, depth - 1)
        else:
            merged[key] = rvalue
    return merged


def _read_yaml(path: Path) -> Optional[dict]:
    """Read a YAML mapping from path, or None if the file does not exist."""
    if not path.exists():
        return None
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"Bad config in {path}: expected a mapping")
    return data


def load_config_from_dict(data: dict) -> Config:
    """Build a Config from a (merged) configuration dictionary.

    Args:
        data: Dictionary as found in config.yaml.

    Returns:
        Config with defaults for missing keys.
    """
    jira_section = data.get("jira", {}) or {}
    hooks_section = data.get("hooks", {}) or {}
    defaults = Config()

    jira = JiraConfig(
        url=jira_section.get("url", ""),
        user_login=jira_section.get("user_login"),
        api_token=jira_section.get("api_token"),
        pat_token=jira_section.get("pat_token"),
        max_query_results=int(jira_section.get("max_query_results", 15)),
    )
    hooks = HooksConfig(
        allow_branch_missing_issue_key=bool(
            hooks_section.get("allow_branch_missing_issue_key", False)
        ),
        allow_branch_and_commit_msg_mismatch=bool(
            hooks_section.get("allow_branch_and_commit_msg_mismatch", False)
        ),
    )

    return Config(
        jira=jira,
        hooks=hooks,
        issue_query=data.get("issue_query", defaults.issue_query),
        retry_query=data.get("retry_query", defaults.retry_query),
        always_confirm_date=bool(data.get("always_confirm_date", defaults.always_confirm_date)),
        always_short_branch_names=bool(
            data.get("always_short_branch_names", defaults.always_short_branch_names)
        ),
        enable_comment_prompts=bool(
            data.get("enable_comment_prompts", defaults.enable_comment_prompts)
        ),
        one_transition_auto_move=bool(
            data.get("one_transition_auto_move", defaults.one_transition_auto_move)
        ),
    )


def config_to_dict(config: Config) -> dict:
    """Convert a Config to a dictionary for saving, omitting unset values."""
    data = asdict(config)
    data["jira"] = {k: v for k, v in data["jira"].items() if v is not None}
    return data


def _apply_env_credentials(config: Config) -> None:
    """Override credentials from JIG_* environment variables."""
    load_dotenv()
    for attr, env_var in _CREDENTIAL_ENV_VARS.items():
        value = os.environ.get(env_var)
        if value:
            setattr(config.jira, attr, value)


def load_config(start: Optional[Path] = None) -> Config:
    """Load and merge the global and workspace configuration files.

    Args:
        start: Directory used to locate the workspace. Defaults to cwd.

    Returns:
        The merged Config.

    Raises:
        ConfigError: If neither file exists or a file cannot be parsed.
    """
    global_file = get_global_config_file()
    workspace_file = get_workspace_config_file(start)

    global_data = _read_yaml(global_file)
    workspace_data = _read_yaml(workspace_file)

    if global_data is None and workspace_data is None:
        raise ConfigError(
            "Config files missing, expected one or both:\n"
            f"  {global_file}\n  {workspace_file}\n"
            "Run 'jig init' to create one."
        )

    merged = merge_dicts(global_data or {}, workspace_data or {})
    config = load_config_from_dict(merged)
    _apply_env_credentials(config)
    return config


def validate_credentials(jira: JiraConfig) -> None:
    """Check that the Jira connection settings are usable.

    Raises:
        ConfigError: If the url or credentials are missing or inconsistent.
    """
    if not jira.url:
        raise ConfigError("Bad config: 'jira.url' is missing")
    if not jira.pat_token and not jira.api_token:
        raise ConfigError("Bad config: neither api_token nor pat_token specified")
    if jira.api_token and not jira.user_login:
        raise ConfigError("Bad config: 'user_login' missing, required with api_token")
    if jira.user_login and not jira.api_token and not jira.pat_token:
        raise ConfigError("Bad config: 'api_token' missing, required with user_login")


def save_config(config: Config, path: Path) -> None:
    """Write a Config to a YAML file.

    Args:
        config: Configuration to save.
        path: Target file (global or workspace).
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(path, "w") as f:
            yaml.dump(config_to_dict(config), f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Failed to save config to {path}: {e}")
    if config.jira.api_token or config.jira.pat_token:
        # Owner read/write only, the file holds a token
        os.chmod(path, 0o600)
