"""Configuration loading for the domainslices application.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Faker runs out of distinct usernames well before this for small locales.
MAX_MOCK_USERS = 1000


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API client configuration
    api_base_url: str = Field(
        default="http://127.0.0.1:3000",
        description="Base URL of the API serving /api/users and /api/posts",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for each API request in seconds",
    )

    # Mock API server configuration
    mock_host: str = Field(
        default="127.0.0.1",
        description="Host the mock API server listens on",
    )
    mock_port: int = Field(
        default=3000,
        description="Port the mock API server listens on",
    )
    mock_user_count: int = Field(
        default=50,
        description=(
            f"Number of users generated per /api/users response (at most {MAX_MOCK_USERS})"
        ),
    )
    mock_post_count: int = Field(
        default=20,
        description="Number of posts generated per /api/posts response",
    )
    mock_seed: int | None = Field(
        default=None,
        description="Optional seed making generated records reproducible",
    )
    mock_locale: str = Field(
        default="en_US",
        description="Faker locale used for generated records",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Run mode
    run_mode: Literal["serve", "fetch", "cli"] = Field(
        default="fetch",
        description="Run mode",
    )

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure request timeout is positive."""
        if v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return v

    @field_validator("mock_port")
    @classmethod
    def validate_mock_port(cls, v: int) -> int:
        """Ensure mock port is in valid range."""
        if v <= 0 or v > 65535:
            raise ValueError("mock_port must be between 1 and 65535")
        return v

    @field_validator("mock_user_count", "mock_post_count")
    @classmethod
    def validate_counts(cls, v: int) -> int:
        """Ensure generated collection sizes are positive."""
        if v <= 0:
            raise ValueError("generated record counts must be positive")
        return v

    @field_validator("mock_user_count")
    @classmethod
    def validate_user_count(cls, v: int) -> int:
        """Keep generated usernames within what Faker can keep unique."""
        if v > MAX_MOCK_USERS:
            raise ValueError(f"mock_user_count must be at most {MAX_MOCK_USERS}")
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure the base URL uses http or https."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return v.rstrip("/")


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["MAX_MOCK_USERS", "Settings", "load_settings"]
