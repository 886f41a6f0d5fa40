"""System logger for railway-env operational events.

This module provides a singleton logger for the few things worth reporting:
environment loading outcomes and malformed request headers.

Logging strategy:
- Console (stderr): everything at or above the configured level
- File (optional JSONL): Only issues (WARNING, ERROR, CRITICAL)

The level comes from RAILWAY_ENV_LOG_LEVEL (default WARNING) and is read
once, when the logger is first created. The file handler is configured
separately via configure_system_logger_file().
"""

from __future__ import annotations

__all__ = [
    "configure_system_logger_file",
    "get_system_logger",
    "truncate_for_log",
]

import logging
import os
import sys
from pathlib import Path

from railway_env.constants import (
    APP_NAME,
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENV_VAR,
    MAX_LOGGED_VALUE_LENGTH,
)
from railway_env.telemetry.formatters import ConsoleFormatter, ISO8601Formatter

# Module-level singleton logger
_system_logger: logging.Logger | None = None
_file_handler_configured: bool = False


def _resolve_level() -> int:
    """Resolve the log level from the environment, falling back to WARNING."""
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper() or DEFAULT_LOG_LEVEL
    levels = logging.getLevelNamesMapping()
    level = levels.get(name)
    if level is None:
        return levels[DEFAULT_LOG_LEVEL]
    return level


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with a stderr handler only.
    A file handler can be added later via configure_system_logger_file().

    Returns:
        logging.Logger: Configured system logger instance.

    Example:
        >>> from railway_env.telemetry import get_system_logger
        >>> logger = get_system_logger()
        >>> logger.warning({"event": "railway_env_malformed", "message": "..."})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    level = _resolve_level()

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(level)
    _system_logger.propagate = False  # Don't propagate to root logger

    # Close and remove any existing handlers to avoid duplicates
    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def configure_system_logger_file(log_path: Path) -> None:
    """Add a JSONL file handler to the system logger.

    Only the first call has any effect. The file handler logs
    WARNING, ERROR, CRITICAL only.

    Args:
        log_path: Path to the log file. Parent directories are created.
    """
    global _file_handler_configured

    if _file_handler_configured:
        return

    logger = get_system_logger()

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass  # If we can't create the log dir, stderr still works

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    _file_handler_configured = True


def truncate_for_log(value: str, max_length: int = MAX_LOGGED_VALUE_LENGTH) -> str:
    """Truncate an untrusted value before it goes into a log record.

    Args:
        value: Raw value (e.g., a header from the client).
        max_length: Maximum number of characters kept.

    Returns:
        The value, cut to max_length with a trailing "..." if it was longer.
    """
    if len(value) <= max_length:
        return value
    return value[:max_length] + "..."
