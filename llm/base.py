"""Base class for LLM providers."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from core.exceptions import LLMException

logger = logging.getLogger(__name__)

# Response shapes differ per API; these are what a missing field raises.
MALFORMED_RESPONSE_ERRORS = (KeyError, IndexError, TypeError, AttributeError)


class BaseLLMProvider(ABC):
    """Base class for all LLM providers.

    Subclasses build the request payload and pick the generated text out of
    the response; transport and error mapping live here.
    """

    #: Human-readable API name used in error messages.
    label = "LLM"

    def __init__(self, config: dict[str, Any]) -> None:
        """
        Initialize LLM provider.

        Args:
            config: Provider-specific configuration. Recognised keys are
                ``model``, ``temperature``, ``max_tokens`` and ``timeout``
                plus whatever the concrete provider needs.
        """
        self.config = config
        self.model = config.get("model", "")
        self.temperature = config.get("temperature", 0.7)
        self.max_tokens = config.get("max_tokens", 4000)
        self.timeout = config.get("timeout", 120)

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        """
        Generate text from prompt.

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            temperature: Sampling temperature, provider default if None
            max_tokens: Maximum tokens to generate, provider default if None
            **kwargs: Additional provider-specific payload fields

        Returns:
            Generated text

        Raises:
            LLMException: If the request fails or the response is malformed
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the provider answers, False otherwise."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get provider name."""

    def _sampling(self, temperature: float | None, max_tokens: int | None) -> tuple[float, int]:
        """Resolve per-call overrides against the configured defaults."""
        return (
            self.temperature if temperature is None else temperature,
            self.max_tokens if max_tokens is None else max_tokens,
        )

    def _malformed(self, error: Exception) -> LLMException:
        return LLMException(
            f"Unexpected response from {self.label}",
            details={"provider": self.provider_name, "error": str(error)},
        )

    async def _post_json(
        self, url: str, payload: dict[str, Any], headers: dict[str, str] | None = None
    ) -> Any:
        """POST *payload* and return the decoded JSON body."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.error("%s API error: %s", self.label, e)
            raise LLMException(
                f"{self.label} API request failed: {str(e)}",
                details={"provider": self.provider_name},
            ) from e
        except ValueError as e:
            raise self._malformed(e) from e

    async def _probe(
        self, url: str, headers: dict[str, str] | None = None, timeout: float = 10
    ) -> bool:
        """GET *url* and report whether it answered 200."""
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.get(url, headers=headers)
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error("%s health check failed: %s", self.label, e)
            return False
