"""Logging configuration for jig.

Logging is off by default so hook runs stay silent. It is controlled by
environment variables:

    JIG_LOG: Set to "true" to enable logging (default: "false")
    JIG_LOG_FILE: Path to log file (default: ~/.jig.log)
"""

import logging
import os
from pathlib import Path
from typing import Optional

LOGGER_NAME = "jig"

_logger: Optional[logging.Logger] = None


def _log_enabled() -> bool:
    return os.environ.get("JIG_LOG", "false").lower() == "true"


def _log_file() -> Path:
    return Path(os.environ.get("JIG_LOG_FILE", str(Path.home() / ".jig.log")))


def setup_logging() -> logging.Logger:
    """Configure the jig logger from the environment.

    Writes to the configured log file when JIG_LOG is "true", otherwise
    attaches a NullHandler.

    Returns:
        Configured logger instance.
    """
    global _logger

    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = False

    if _log_enabled():
        log_file = _log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(log_file)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)s %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.addHandler(logging.NullHandler())

    _logger = logger
    return logger


def reset_logging() -> None:
    """Drop the cached logger so the next call re-reads the environment."""
    global _logger
    if _logger is not None:
        for handler in list(_logger.handlers):
            handler.close()
            _logger.removeHandler(handler)
    _logger = None


def get_logger() -> logging.Logger:
    """Get the configured logger, creating it if necessary."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_message(message: str, level: int = logging.INFO) -> None:
    """Log a message if logging is enabled."""
    get_logger().log(level, message)


def log_command(command: str, exit_code: int = 0) -> None:
    """Log an external command and its exit code."""
    get_logger().info(f"COMMAND: {command} | EXIT_CODE: {exit_code}")
