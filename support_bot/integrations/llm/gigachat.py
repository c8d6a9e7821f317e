"""
GigaChat LLM provider implementation.
"""

from gigachat import GigaChat
from gigachat.models import Chat, Messages, MessagesRole

from support_bot.config import settings
from support_bot.integrations.llm.base import BaseLLM, LLMResponse


class GigaChatLLM(BaseLLM):
    """GigaChat LLM provider, one client session per reply."""

    def __init__(
        self,
        credentials: str | None = None,
        scope: str | None = None,
        model: str | None = None,
    ):
        self.credentials = credentials or settings.gigachat_credentials
        self.scope = scope or settings.gigachat_scope
        self.model = model or settings.gigachat_model

        if not self.credentials:
            raise ValueError(
                "GigaChat credentials not provided. "
                "Set GIGACHAT_CREDENTIALS in .env file."
            )

    def _get_client(self) -> GigaChat:
        return GigaChat(
            credentials=self.credentials,
            scope=self.scope,
            model=self.model,
            verify_ssl_certs=False,
        )

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> LLMResponse:
        """
        Answer a customer message.

        Args:
            prompt: Customer message
            system_prompt: Shop rules and order context
            temperature: Sampling temperature
            max_tokens: Reply length limit

        Returns:
            LLMResponse; empty content if the model returned no choices
        """
        messages = []
        if system_prompt:
            messages.append(Messages(role=MessagesRole.SYSTEM, content=system_prompt))
        messages.append(Messages(role=MessagesRole.USER, content=prompt))

        chat = Chat(messages=messages, temperature=temperature, max_tokens=max_tokens)

        async with self._get_client() as client:
            response = await client.achat(chat)

        content = response.choices[0].message.content if response.choices else ""
        return LLMResponse(
            content=content,
            tokens_used=response.usage.total_tokens if response.usage else None,
            model=response.model or self.model,
        )

    @property
    def name(self) -> str:
        return "gigachat"
