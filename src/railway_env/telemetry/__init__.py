"""System operational logging for railway-env.

Structure:
    formatters.py     - ConsoleFormatter (stderr) and ISO8601Formatter (JSONL)
    system_logger.py  - Singleton system logger and file handler setup
"""

from railway_env.telemetry.formatters import ConsoleFormatter, ISO8601Formatter
from railway_env.telemetry.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    truncate_for_log,
)

__all__ = [
    "ConsoleFormatter",
    "ISO8601Formatter",
    "configure_system_logger_file",
    "get_system_logger",
    "truncate_for_log",
]
