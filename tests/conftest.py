"""
Shared test fixtures and configuration.

Settings are cached process-wide by get_settings(); clear the cache around
each test so environment changes made by one test never leak into another.
"""

import pytest

from src.config.settings import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
