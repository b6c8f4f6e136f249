"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from src.timekeeper.core.config import Settings

pytestmark = pytest.mark.unit


def test_defaults_use_sqlite(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.is_sqlite
    assert settings.database_url.startswith("sqlite+aiosqlite")


def test_default_timezone_must_exist():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_timezone="Not/AZone")


def test_default_timezone_accepts_iana_name():
    settings = Settings(_env_file=None, default_timezone="Europe/Berlin")
    assert settings.default_timezone == "Europe/Berlin"


def test_database_url_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://localhost/timekeeper")
    settings = Settings(_env_file=None)
    assert not settings.is_sqlite
