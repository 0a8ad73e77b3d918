"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutrisnap.services.analyzers import CaloriesSource

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    webhook_token: str
    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    openai_timeout_seconds: float = 60.0
    storage_bucket: str = "uploads"
    summary_timezone: str = "UTC"
    calories_source: CaloriesSource = CaloriesSource.CALORIES
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
