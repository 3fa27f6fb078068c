# tests/conftest.py
import logging
import os
from unittest.mock import MagicMock

import pytest

from devenv.config_models import AppSettings


@pytest.fixture(autouse=True)
def clean_devenv_environment(monkeypatch):
    """Keep DEVENV_* variables from the invoking shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("DEVENV_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def app_settings():
    """Fixture to provide an AppSettings object with the default values."""
    return AppSettings()


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)
