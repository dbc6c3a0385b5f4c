# src/reqlog/tests/test_config/test_settings.py
from pathlib import Path

import pytest
from pydantic import ValidationError

from reqlog.config.settings import Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("REQLOG_LOG_LEVEL", "REQLOG_LOG_FORMAT", "REQLOG_ENV"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert settings.ENV == "development"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FORMAT == "json"
    assert settings.LOG_DIR == Path("/var/log/reqlog")
    assert settings.LOG_USE_QUEUE is False
    assert settings.REQUEST_LOGGER_NAME == "reqlog.requests"
    assert settings.REQUEST_LOG_LEVEL == "info"


def test_env_values_are_normalized(monkeypatch):
    monkeypatch.setenv("REQLOG_LOG_LEVEL", "debug")
    monkeypatch.setenv("REQLOG_LOG_FORMAT", "TEXT")
    monkeypatch.setenv("REQLOG_REQUEST_LOG_LEVEL", "WARN")

    settings = get_settings()

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"
    assert settings.REQUEST_LOG_LEVEL == "warn"
    assert get_settings() is settings


def test_invalid_log_level_rejected(monkeypatch):
    monkeypatch.setenv("REQLOG_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
