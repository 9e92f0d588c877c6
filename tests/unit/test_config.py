"""Test configuration module"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from calendar_engine.config import (
    Settings,
    clear_settings_cache,
    get_settings,
    override_settings,
)


def test_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings are built from prefixed environment variables."""
    monkeypatch.setenv("CALENDAR_ENGINE_RECURRENCE_MAX_OCCURRENCES", "52")
    monkeypatch.setenv("CALENDAR_ENGINE_LOG_FILE", "/tmp/engine/engine.log")

    settings = get_settings(refresh=True)

    assert settings.environment == "testing"
    assert settings.is_testing
    assert settings.recurrence_max_occurrences == 52
    assert settings.log_file == Path("/tmp/engine/engine.log")


def test_defaults() -> None:
    settings = get_settings()

    assert settings.recurrence_max_occurrences == 366
    assert settings.default_slot_minutes == 60
    assert settings.view_slot_minutes == 30
    assert settings.max_reminder_minutes == 10080


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()

    first = get_settings()
    clear_settings_cache()
    assert get_settings() is not first


def test_override_settings_restores_previous() -> None:
    original = get_settings()

    with override_settings(default_slot_minutes=15) as patched:
        assert get_settings() is patched
        assert patched.default_slot_minutes == 15

    assert get_settings() is original


def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CALENDAR_ENGINE_DEFAULT_SLOT_MINUTES", "0")

    with pytest.raises(ValidationError):
        Settings()
