"""
Pytest configuration and fixtures for earlydecoder tests.
"""

import os
import tempfile
from pathlib import Path

import pytest

from earlydecoder import settings as settings_module


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from ED_* variables and cached settings."""
    for key in list(os.environ):
        if key.upper().startswith("ED_"):
            monkeypatch.delenv(key, raising=False)
    settings_module._settings = None
    yield
    settings_module._settings = None
