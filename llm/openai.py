"""OpenAI chat completions provider."""

from typing import Any

from llm.base import MALFORMED_RESPONSE_ERRORS, BaseLLMProvider


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions provider."""

    label = "OpenAI"

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        self.api_key = config.get("api_key")
        self.model = config.get("model") or "gpt-4"
        self.base_url = config.get("base_url", "https://api.openai.com/v1")

        if not self.api_key:
            raise ValueError("OpenAI API key is required")

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate text using the OpenAI chat completions API."""
        temperature, max_tokens = self._sampling(temperature, max_tokens)

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        result = await self._post_json(
            f"{self.base_url}/chat/completions",
            {
                "model": self.model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
                **kwargs,
            },
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        try:
            return result["choices"][0]["message"]["content"].strip()
        except MALFORMED_RESPONSE_ERRORS as e:
            raise self._malformed(e) from e

    async def health_check(self) -> bool:
        return await self._probe(
            f"{self.base_url}/models", headers={"Authorization": f"Bearer {self.api_key}"}
        )

    @property
    def provider_name(self) -> str:
        return "openai"
