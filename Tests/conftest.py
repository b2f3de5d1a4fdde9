"""
Root conftest.py for shared test fixtures and configuration.
This file provides common fixtures used across the test suite.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path for consistent imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from turbo_shell import config as shell_config
from Tests.turbo_test_utilities import BASE_URL, FakeScreen, FakeSite, MessageCollector


# ========== Configuration Fixtures ==========

@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the shell at a throwaway config file and clear overrides."""
    config_path = tmp_path / "config" / "config.toml"
    monkeypatch.setattr(shell_config, "DEFAULT_CONFIG_PATH", config_path)
    monkeypatch.setattr(shell_config, "_CONFIG_CACHE", None)
    monkeypatch.delenv(shell_config.BASE_URL_ENV_VAR, raising=False)
    monkeypatch.delenv(shell_config.ENVIRONMENT_ENV_VAR, raising=False)
    yield config_path


@pytest.fixture
def write_config(isolated_config):
    """Write a user config file and drop the cached one."""
    def _write(content: str):
        isolated_config.parent.mkdir(parents=True, exist_ok=True)
        isolated_config.write_text(content, encoding="utf-8")
        shell_config._CONFIG_CACHE = None
        return isolated_config
    return _write


# ========== HTTP and Message Fixtures ==========

@pytest.fixture
def fake_site():
    return FakeSite()


@pytest.fixture
def collector():
    return MessageCollector()


@pytest.fixture
def make_screen():
    def _make(path: str = "/"):
        return FakeScreen(BASE_URL + path)
    return _make
