"""
Core pytest configuration for the reqlog test suite.

Shared fixtures:
  - transports from tests/test_fixtures/transport_fixtures.py
  - `make_settings`: a duck-typed settings object for the logging builder
  - `reset_logging`: stops any queue listener and restores the root logger
    after tests that install a logging configuration
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

# Quiet third-party loggers before anything else imports them.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest

from reqlog.config.settings import get_settings
from reqlog.core.logging.builder import stop_queue_logging

from .test_fixtures.transport_fixtures import (  # noqa: F401  (registered as fixtures)
    recording_transport,
    failing_transport,
)


@pytest.fixture()
def make_settings():
    """Build a lightweight settings object; keyword arguments override defaults."""

    def _make(**overrides) -> SimpleNamespace:
        values = {
            "ENV": "testing",
            "SERVICE_NAME": "reqlog-tests",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
            "LOG_TO_STDOUT": True,
            "LOG_DIR": Path("logs"),
            "LOG_MAX_BYTES": 1_000_000,
            "LOG_BACKUP_COUNT": 1,
            "LOG_USE_QUEUE": False,
            "REQUEST_LOGGER_NAME": "reqlog.requests",
            "REQUEST_LOG_LEVEL": "info",
        }
        values.update(overrides)
        return SimpleNamespace(**values)

    return _make


@pytest.fixture()
def reset_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    stop_queue_logging()
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in saved_handlers:
            h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
