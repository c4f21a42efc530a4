"""Jira integration for git: issue branches and commit-msg validation."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("jig")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
