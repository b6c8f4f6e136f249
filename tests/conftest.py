"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Store-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set environment before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DEFAULT_TIMEZONE", "UTC")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest

from src.timekeeper.core.config import get_settings
from tests.helpers import FakeClock

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at epoch 1000 until a test moves it."""
    return FakeClock(1000)
