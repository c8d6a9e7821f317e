"""
Configuration management for the support bot.
Loads settings from environment variables with validation.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = Path(__file__).parent.parent / "data"

    # Telegram
    telegram_bot_token: str = Field(..., description="Telegram Bot API token")

    # LLM Provider
    llm_provider: Literal["openai", "gigachat"] = Field(
        default="openai", description="LLM provider to use"
    )
    llm_temperature: float = Field(default=0.7, description="Sampling temperature")
    llm_max_tokens: int = Field(default=500, description="Max tokens per reply")

    # OpenAI
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI chat model")

    # GigaChat
    gigachat_credentials: Optional[str] = Field(
        default=None, description="GigaChat API credentials"
    )
    gigachat_scope: str = Field(
        default="GIGACHAT_API_PERS", description="GigaChat API scope"
    )
    gigachat_model: str = Field(default="GigaChat", description="GigaChat chat model")

    # Shopify
    shopify_store_url: Optional[str] = Field(
        default=None, description="Shop domain, e.g. example.myshopify.com"
    )
    shopify_access_token: Optional[str] = Field(
        default=None, description="Shopify Admin API access token"
    )
    shopify_api_version: str = Field(default="2024-01", description="Admin API version")
    commerce_timeout: float = Field(
        default=10.0, description="Commerce API request timeout in seconds"
    )

    # Database (inquiry log)
    database_url: Optional[str] = Field(
        default=None,
        description="Database connection URL",
    )

    @property
    def db_url(self) -> str:
        """Get database URL with absolute path."""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / 'support.db'}"

    # Conversation
    conversation_ttl_minutes: int = Field(
        default=30, description="Inactivity window before conversation state expires"
    )
    history_limit: int = Field(
        default=5, description="Number of past inquiries loaded per message"
    )
    max_name_candidates: int = Field(
        default=5, description="Max orders listed when searching by customer name"
    )

    # Shop information used in canned replies
    business_hours: str = Field(
        default="平日9:00-18:00（土日祝日はお休み）", description="Business hours"
    )
    support_phone: str = Field(default="03-0000-0000", description="Support phone")
    support_email: str = Field(
        default="support@example.com", description="Support email"
    )

    # Debug
    debug: bool = Field(default=False, description="Debug mode")


# Global settings instance
settings = Settings()
