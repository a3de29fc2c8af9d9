"""Local OpenAI-compatible completions provider (LocalAI, llama.cpp server, ...)."""

from typing import Any
from urllib.parse import urlsplit

from llm.base import MALFORMED_RESPONSE_ERRORS, BaseLLMProvider


class LocalAIProvider(BaseLLMProvider):
    """Provider for a self-hosted completions endpoint. No API key needed."""

    label = "Local AI"

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        self.endpoint = config.get("endpoint") or "http://localhost:8080/v1/completions"

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate text using the plain completions API.

        The completions API has no system role, so a system prompt is
        prepended to the user prompt.
        """
        temperature, max_tokens = self._sampling(temperature, max_tokens)
        full_prompt = f"{system_prompt}\n\n{prompt}" if system_prompt else prompt

        payload: dict[str, Any] = {
            "prompt": full_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        }
        if self.model:
            payload["model"] = self.model

        result = await self._post_json(self.endpoint, payload)
        try:
            return result["choices"][0]["text"].strip()
        except MALFORMED_RESPONSE_ERRORS as e:
            raise self._malformed(e) from e

    async def health_check(self) -> bool:
        """Check that the server behind the endpoint lists its models."""
        parts = urlsplit(self.endpoint)
        return await self._probe(f"{parts.scheme}://{parts.netloc}/v1/models", timeout=5)

    @property
    def provider_name(self) -> str:
        return "localai"
