"""Shared fixtures for railway-env tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from railway_env.telemetry import get_system_logger


class _ListHandler(logging.Handler):
    """Collects log records in memory."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def railway_environ() -> dict[str, str]:
    """Minimal environment of a Railway deployment."""
    return {"RAILWAY_PROJECT_ID": "proj1"}


@pytest.fixture
def system_log_records() -> Iterator[list[logging.LogRecord]]:
    """Capture everything the system logger emits, DEBUG included.

    The system logger doesn't propagate, so caplog can't see it.
    """
    logger = get_system_logger()
    handler = _ListHandler()
    previous_level = logger.level
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
