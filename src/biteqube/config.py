"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_PLACEHOLDER_PREFIX = "your_"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_anon_key: str
    huggingface_api_key: str | None = None
    huggingface_model: str = "nateraw/food"
    huggingface_base_url: str = "https://api-inference.huggingface.co/models"
    chatbase_api_key: str | None = None
    chatbase_chatbot_id: str | None = None
    chatbase_base_url: str = "https://www.chatbase.co/api/v1"
    stripe_secret_key: str | None = None
    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    public_origin: str = "http://localhost:5173"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def is_configured(value: str | None) -> bool:
    """Return true when a credential is set to something other than a placeholder."""
    if value is None:
        return False
    cleaned = value.strip()
    if not cleaned:
        return False
    return not cleaned.startswith(_PLACEHOLDER_PREFIX)
