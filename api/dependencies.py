"""FastAPI dependency injection functions."""

import yaml
from fastapi import Depends

from api.config import Settings, get_settings
from core.exceptions import ServiceUnavailableException
from llm.base import BaseLLMProvider
from llm.factory import get_llm_provider
from llm.prompt_manager import PromptManager, get_prompt_manager
from services.script_generator import ScriptGenerator


async def get_settings_dependency() -> Settings:
    """Get application settings."""
    return get_settings()


async def get_provider(settings: Settings = Depends(get_settings_dependency)) -> BaseLLMProvider:
    """Get the configured LLM provider.

    A misconfigured provider (unknown name, missing API key) is reported as
    a 503 rather than crashing the request.
    """
    try:
        return get_llm_provider(settings)
    except ValueError as exc:
        raise ServiceUnavailableException(
            "LLM provider is not configured",
            details={"provider": str(settings.llm_provider.value), "error": str(exc)},
        ) from exc


async def get_prompts() -> PromptManager:
    """Get the cached prompt manager."""
    try:
        return get_prompt_manager()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        raise ServiceUnavailableException(
            "Prompt templates are not available", details={"error": str(exc)}
        ) from exc


async def get_script_generator(
    provider: BaseLLMProvider = Depends(get_provider),
    prompts: PromptManager = Depends(get_prompts),
    settings: Settings = Depends(get_settings_dependency),
) -> ScriptGenerator:
    """Get a script generator bound to the configured provider."""
    return ScriptGenerator(provider, prompts, detect_dialogue=settings.detect_dialogue)
