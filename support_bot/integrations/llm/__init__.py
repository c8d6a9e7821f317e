"""
LLM provider factory and initialization.
"""

from functools import lru_cache

from support_bot.config import settings
from support_bot.integrations.llm.base import BaseLLM, LLMResponse


def get_llm_provider(provider: str | None = None) -> BaseLLM:
    """
    Get LLM provider instance.

    Args:
        provider: Provider name ('openai', 'gigachat')
                  If None, uses settings.llm_provider

    Returns:
        LLM provider instance
    """
    provider = provider or settings.llm_provider

    if provider == "openai":
        from support_bot.integrations.llm.openai import OpenAILLM
        return OpenAILLM()
    elif provider == "gigachat":
        from support_bot.integrations.llm.gigachat import GigaChatLLM
        return GigaChatLLM()
    else:
        raise ValueError(f"Unknown LLM provider: {provider}")


@lru_cache(maxsize=1)
def get_default_llm() -> BaseLLM:
    """Get cached default LLM provider."""
    return get_llm_provider()


__all__ = [
    "BaseLLM",
    "LLMResponse",
    "get_llm_provider",
    "get_default_llm",
]
