"""
Application configuration using environment variables.
"""
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Carbon Footprint API"
    debug: bool = False
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 5000

    # Emission factor provider (Climatiq)
    climatiq_api_key: str
    climatiq_api_url: str = "https://api.climatiq.io/estimate"
    provider_timeout: float = 8.0  # seconds

    # Database
    database_url: str = "sqlite:///./footprint.db"

    # Activities are not tied to authenticated users
    default_user_id: str = "default-user"

    # CORS
    cors_origins: List[str] = ["*"]

    # Rate limiting
    rate_limit: str = "60/minute"

    @field_validator("climatiq_api_key")
    @classmethod
    def api_key_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("CLIMATIQ_API_KEY must be set")
        return value.strip()

    @field_validator("provider_timeout")
    @classmethod
    def timeout_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("PROVIDER_TIMEOUT must be positive")
        return value


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
