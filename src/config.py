"""
Configuration management for the Interview Proxy.

Uses Pydantic Settings for type-safe configuration loading from environment variables.
All configuration is validated at startup to fail fast on misconfiguration.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are validated at startup. A missing API key
    will raise a clear validation error.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="None",
    )

    # ==========================================================================
    # Gemini API Configuration
    # ==========================================================================
    gemini_api_key: str = Field(
        ...,
        description="API key for the Gemini generative-language API",
        min_length=10,
    )

    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Base URL for the Gemini API",
    )

    gemini_api_version: str = Field(
        default="v1",
        description="API version segment of the endpoint path",
    )

    gemini_model: str = Field(
        default="gemini-pro",
        description="Model used for question generation and grading",
    )

    request_timeout: float | None = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for upstream calls (None waits forever)",
    )

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to",
    )

    port: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port the HTTP server listens on",
    )

    cors_origin: str = Field(
        default="http://localhost:3000",
        description="The single origin allowed to call the API from a browser",
    )

    startup_probe: bool = Field(
        default=True,
        description="Send a connectivity probe to the Gemini API on startup",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root logging level",
    )

    @field_validator("gemini_base_url", "cors_origin")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Ensure URLs don't have a trailing slash."""
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @property
    def generate_content_url(self) -> str:
        """Full URL of the generateContent endpoint, without credentials."""
        return (
            f"{self.gemini_base_url}/{self.gemini_api_version}"
            f"/models/{self.gemini_model}:generateContent"
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()
