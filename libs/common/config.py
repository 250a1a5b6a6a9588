from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    # Application
    ENVIRONMENT: Literal["local", "development", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "Asia/Kolkata"
    CURRENCY: str = "INR"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # REST API layer the portals talk to
    API_BASE_URL: str = "http://localhost:3000"
    API_TIMEOUT_SECONDS: float = 10.0

    # Payment gateway (hosted checkout runs in the browser)
    PAYMENT_GATEWAY_MODE: Literal["sandbox", "production"] = "sandbox"

    # Membership wizard
    PROVIDER_SEARCH_DEBOUNCE_SECONDS: float = 0.3
    PROVIDER_SEARCH_MIN_LENGTH: int = 2
    PROVIDER_SEARCH_LIMIT: int = 10
    CLAIM_REDIRECT_DELAY_SECONDS: float = 2.0

    # KYC uploads
    KYC_MAX_DOCUMENT_BYTES: int = 10 * 1024 * 1024

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Identity
    # Placeholder keeps local/test runs working; real deployments override via env.
    AUTH_JWT_SECRET: str = "test-jwt-secret"
    PROVIDER_COOKIE: str = "__fb_provider"
    CONSUMER_COOKIE: str = "__fb_consumer"
    MODERATOR_COOKIE: str = "__fb_moderator"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """
    Return the global settings instance, cached.
    """
    return Settings()
