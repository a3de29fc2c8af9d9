"""Pytest configuration and fixtures."""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.config import Settings, get_settings
from api.dependencies import get_provider, get_script_generator, get_settings_dependency
from api.main import app
from llm.base import BaseLLMProvider
from llm.prompt_manager import PromptManager
from services.script_generator import ScriptGenerator

SAMPLE_SCREENPLAY = (
    "int. kitchen - night\n"
    "\n"
    "A kettle screams on the stove. MARGARET, sixty, moves to silence it while "
    "the rain hammers the window behind her and the lights flicker twice.\n"
    "\n"
    "MARGARET\n"
    "(under her breath)\n"
    "Not tonight.\n"
    "\n"
    "cut to:\n"
    "\n"
    "EXT. HARBOR - DAWN\n"
)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_screenplay() -> str:
    return SAMPLE_SCREENPLAY


@pytest.fixture
def mock_provider() -> MagicMock:
    """LLM provider double returning a short scene."""
    provider = MagicMock(spec=BaseLLMProvider)
    provider.provider_name = "mock"
    provider.generate = AsyncMock(return_value="INT. OFFICE - DAY\n\nJOHN\nHello.")
    provider.health_check = AsyncMock(return_value=True)
    return provider


@pytest.fixture
def prompt_manager() -> PromptManager:
    """Prompt manager backed by the repository's prompt YAML."""
    return PromptManager()


@pytest.fixture
def generator(mock_provider, prompt_manager) -> ScriptGenerator:
    return ScriptGenerator(mock_provider, prompt_manager)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(llm_provider="openai", llm_api_key="sk-test", max_input_chars=10_000)


@pytest.fixture
def client(mock_provider, generator, test_settings) -> Generator[TestClient, None, None]:
    """Test client with the LLM layer replaced by a mock."""
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    app.dependency_overrides[get_provider] = lambda: mock_provider
    app.dependency_overrides[get_script_generator] = lambda: generator
    yield TestClient(app)
    app.dependency_overrides.clear()
