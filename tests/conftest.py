"""Shared pytest fixtures."""

import os
from unittest.mock import patch

import pytest

from ssrf_guard.settings import Settings


@pytest.fixture
def clean_env():
    """Run with no SSRF_GUARD_* variables from the host environment."""
    env = {key: value for key, value in os.environ.items() if not key.upper().startswith("SSRF_GUARD_")}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def mock_settings(clean_env):
    """Settings with defaults."""
    return Settings(
        log_level="DEBUG",
        allow_documentation_ranges=False,
        max_bulk_addresses=10,
    )
