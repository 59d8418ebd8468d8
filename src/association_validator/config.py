"""
Configuration settings for the Association Validator.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Association Validator"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Remote API ===
    API_BASE_URL: str = "https://candidate.hubteam.com/candidateTest/v3/problem"
    API_USER_KEY: str = ""  # Required for any remote call, set in .env
    API_TIMEOUT: float = 30.0  # seconds
    API_MAX_RETRIES: int = 3
    API_RETRY_BACKOFF_BASE: float = 2.0  # Exponential backoff multiplier

    # === Validation Limits ===
    MAX_ROLE_PER_COMPANY: int = Field(default=5, ge=0)
    MAX_ROLE_PER_CONTACT: int = Field(default=2, ge=0)

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
