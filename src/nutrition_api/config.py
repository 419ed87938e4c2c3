"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_base_url: str | None = None
    openai_vision_model: str = "gpt-4o"
    openai_text_model: str = "gpt-4.1-mini"
    vision_temperature: float = 0.7
    recalculation_temperature: float = 0.3
    recalculation_max_tokens: int = 1500
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    cors_allow_origin: str = "*"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def durable_profiles(self) -> bool:
        """Return True when Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_service_key)
