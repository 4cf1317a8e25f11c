"""Unit tests for settings and logging setup."""

import pytest
import structlog
from pydantic import ValidationError

from gdatalib.config import Settings
from gdatalib.log import configure_logging


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("GDATA_ESCAPE_ALL_ATTRIBUTES", raising=False)
    settings = Settings(_env_file=None)
    assert settings.escape_all_attributes is False
    assert settings.gdata_version == "2"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GDATA_ESCAPE_ALL_ATTRIBUTES", "true")
    monkeypatch.setenv("GDATA_REQUEST_TIMEOUT_SECONDS", "5")
    settings = Settings(_env_file=None)
    assert settings.escape_all_attributes is True
    assert settings.request_timeout_seconds == 5.0


def test_configure_logging(capsys):
    configure_logging("warning")
    logger = structlog.get_logger()
    logger.info("hidden event")
    logger.warning("shown event", uri="http://example.com/")
    output = capsys.readouterr().out
    assert "shown event" in output
    assert "hidden event" not in output
    structlog.reset_defaults()


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_settings_reject_non_positive_timeout(monkeypatch):
    monkeypatch.setenv("GDATA_REQUEST_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
