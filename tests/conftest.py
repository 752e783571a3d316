"""Pytest configuration and shared fixtures."""

import pytest

from calpicker.config import reset_calendar_config
from calpicker.scheduler import ManualScheduler


@pytest.fixture(autouse=True)
def reset_config_for_all_tests():
    """Reset the calendar config before and after each test for isolation.

    The config is a module-level singleton that persists across tests.
    This fixture ensures each test starts with the default settings.
    """
    reset_calendar_config()
    yield
    reset_calendar_config()


@pytest.fixture
def scheduler():
    """Deterministic timer source for settle steps."""
    return ManualScheduler()
