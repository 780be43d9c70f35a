"""
Pytest fixtures for AI Search Assistant tests.
Upstream calls are always faked: either an AsyncMock LLM service or an
httpx.MockTransport behind the real client.
"""

import json

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from src.core.config.settings import Settings, get_settings
from src.infra.lifecycle.dependencies import get_llm_service
from src.main import app

VALID_COMPLETION = json.dumps(
    {
        "direct_answer": "Paris is the capital of France.",
        "people_also_ask": [
            {"question": f"Question {i}?", "answer": f"Answer {i}."}
            for i in range(1, 6)
        ],
    }
)


@pytest.fixture
def settings():
    """Settings with a configured credential, isolated from the real environment."""
    return Settings(_env_file=None, DEEPSEEK_API_KEY="test-key", API_KEY=None)


@pytest.fixture
def settings_without_key():
    return Settings(_env_file=None, DEEPSEEK_API_KEY=None, API_KEY=None)


@pytest.fixture
def mock_llm():
    """Fake LLM service returning a well-formed completion."""
    llm = AsyncMock()
    llm.complete = AsyncMock(return_value=VALID_COMPLETION)
    return llm


@pytest.fixture
def api_client(settings, mock_llm):
    """TestClient with the LLM service and settings overridden."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_llm_service] = lambda: mock_llm

    yield TestClient(app)

    app.dependency_overrides = {}


@pytest.fixture
def override_dependencies():
    """Register app.dependency_overrides entries; cleared after the test even on failure."""

    def _override(dependency, value):
        app.dependency_overrides[dependency] = lambda: value

    yield _override

    app.dependency_overrides = {}
