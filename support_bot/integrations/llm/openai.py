"""
OpenAI chat completions provider.
"""

from openai import AsyncOpenAI

from support_bot.config import settings
from support_bot.integrations.llm.base import BaseLLM, LLMResponse


class OpenAILLM(BaseLLM):
    """OpenAI LLM provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
    ):
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model

        if not self.api_key:
            raise ValueError(
                "OpenAI API key not provided. "
                "Set OPENAI_API_KEY in .env file."
            )

        self._client = AsyncOpenAI(api_key=self.api_key)

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> LLMResponse:
        """Generate response using OpenAI chat completions."""
        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        completion = await self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        return LLMResponse(
            content=completion.choices[0].message.content or "",
            tokens_used=completion.usage.total_tokens if completion.usage else None,
            model=completion.model,
        )

    @property
    def name(self) -> str:
        return "openai"
