"""Shared fixtures for unit tests.

Unit tests never call the live API: the completion client is always an
AsyncMock, and settings are built from a controlled environment.
"""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from recipe_snap.utils.config import Config
from tests.unit.helpers import SAMPLE_RECIPES


@pytest.fixture
def settings(monkeypatch):
    """Config with a fake API key and defaults for everything else."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key-1234567890")
    for name in (
        "GEMINI_MODEL",
        "HANDLER_MODE",
        "RECIPE_COUNT",
        "MAX_OUTPUT_TOKENS",
        "TEMPERATURE",
        "REQUEST_TIMEOUT_SECONDS",
        "MAX_IMAGE_SIZE_MB",
        "VALIDATE_RECIPES",
    ):
        monkeypatch.delenv(name, raising=False)
    return Config()


@pytest.fixture
def completion_client():
    """Completion client mock returning SAMPLE_RECIPES as JSON text."""
    client = Mock()
    client.complete = AsyncMock(return_value=json.dumps(SAMPLE_RECIPES))
    return client
