"""Anthropic messages API provider."""

from typing import Any

from llm.base import MALFORMED_RESPONSE_ERRORS, BaseLLMProvider

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(BaseLLMProvider):
    """Anthropic messages API provider.

    The system prompt travels in the top-level ``system`` field; the reply
    is the concatenation of all text content blocks.
    """

    label = "Anthropic"

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        self.api_key = config.get("api_key")
        self.model = config.get("model") or "claude-3-opus-20240229"
        self.base_url = config.get("base_url", "https://api.anthropic.com/v1")

        if not self.api_key:
            raise ValueError("Anthropic API key is required")

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        temperature, max_tokens = self._sampling(temperature, max_tokens)

        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        }
        if system_prompt:
            payload["system"] = system_prompt

        result = await self._post_json(f"{self.base_url}/messages", payload, self._headers())
        try:
            return "".join(
                block.get("text", "")
                for block in result["content"]
                if block.get("type", "text") == "text"
            ).strip()
        except MALFORMED_RESPONSE_ERRORS as e:
            raise self._malformed(e) from e

    async def health_check(self) -> bool:
        return await self._probe(f"{self.base_url}/models", headers=self._headers())

    @property
    def provider_name(self) -> str:
        return "anthropic"
