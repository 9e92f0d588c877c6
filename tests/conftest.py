"""
Shared fixtures and collection settings.

- Test environment variables are set for every test (autouse)
- The cached settings instance is cleared around each test
- The project root is added to ``sys.path`` so ``import calendar_engine`` resolves
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Set test environment variables and reset the settings cache."""
    from calendar_engine.config import clear_settings_cache

    env: dict[str, str] = {
        "CALENDAR_ENGINE_ENVIRONMENT": "testing",
        "CALENDAR_ENGINE_LOG_LEVEL": "DEBUG",
        "CALENDAR_ENGINE_LOG_FORMAT": "console",
    }
    for k, v in env.items():
        monkeypatch.setenv(k, v)

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def make_event():
    """Factory for events with sensible defaults."""
    from calendar_engine.scheduling import Event

    counter = {"n": 0}

    def _make(
        start: datetime,
        end: datetime,
        **fields,
    ) -> Event:
        counter["n"] += 1
        fields.setdefault("id", f"evt-{counter['n']}")
        fields.setdefault("title", f"Event {counter['n']}")
        return Event(start_time=start, end_time=end, **fields)

    return _make
