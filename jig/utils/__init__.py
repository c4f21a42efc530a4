"""Shared utilities for jig."""

from jig.utils.logging import get_logger, log_command, log_message, setup_logging

__all__ = [
    "get_logger",
    "log_command",
    "log_message",
    "setup_logging",
]
