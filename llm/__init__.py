"""LLM provider package for FilmForge API."""

from llm.base import BaseLLMProvider
from llm.factory import get_llm_provider

__all__ = ["get_llm_provider", "BaseLLMProvider"]
