"""Tests for environment-driven engine settings."""

import pytest
from pydantic import ValidationError
from scriptstr.config import EngineSettings, get_settings


def test_defaults(monkeypatch):
    for name in ("SCRIPTSTR_LOG_LEVEL", "SCRIPTSTR_MAX_STRING_LENGTH", "SCRIPTSTR_ECHO_PRINTS"):
        monkeypatch.delenv(name, raising=False)
    settings = EngineSettings()
    assert settings.log_level == "WARNING"
    assert settings.max_string_length is None
    assert settings.echo_prints is False


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("SCRIPTSTR_MAX_STRING_LENGTH", "64")
    monkeypatch.setenv("SCRIPTSTR_ECHO_PRINTS", "true")
    settings = EngineSettings()
    assert settings.max_string_length == 64
    assert settings.echo_prints is True


def test_log_level_is_normalized():
    assert EngineSettings(log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        EngineSettings(log_level="chatty")


def test_negative_length_rejected():
    with pytest.raises(ValidationError):
        EngineSettings(max_string_length=-1)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()

