"""Shared fixtures: isolated settings and a clean root logger."""

import logging
from collections.abc import Iterator

import pytest
from helpers import API

from profilter.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the developer's environment and cached settings out of the tests."""
    for var in ("API_KEY", "PROFILTER_API_BASE_URL", "PROFILTER_LOG_LEVEL", "PROFILTER_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(api_key="test-token", api_base_url=API)


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Leave the root logger the way pytest configured it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
