"""Factory for creating LLM providers."""

import logging

from api.config import Settings
from core.models import LLMProviderType
from llm.anthropic import AnthropicProvider
from llm.base import BaseLLMProvider
from llm.local_ai import LocalAIProvider
from llm.openai import OpenAIProvider

logger = logging.getLogger(__name__)


def get_llm_provider(settings: Settings) -> BaseLLMProvider:
    """
    Create LLM provider based on settings.

    Args:
        settings: Application settings

    Returns:
        Initialized LLM provider

    Raises:
        ValueError: If provider type is invalid or its API key is missing
    """
    provider_type = LLMProviderType(settings.llm_provider)

    logger.info("Initializing LLM provider: %s", provider_type.value)

    config = {
        "model": settings.llm_model,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
        "timeout": settings.llm_timeout,
    }

    if provider_type == LLMProviderType.OPENAI:
        return OpenAIProvider({**config, "api_key": settings.llm_api_key})

    elif provider_type == LLMProviderType.ANTHROPIC:
        return AnthropicProvider({**config, "api_key": settings.llm_api_key})

    elif provider_type == LLMProviderType.LOCALAI:
        return LocalAIProvider({**config, "endpoint": settings.local_llm_endpoint})

    else:
        raise ValueError(
            f"Invalid LLM provider: {provider_type}. "
            f"Valid options: {', '.join(p.value for p in LLMProviderType)}"
        )
