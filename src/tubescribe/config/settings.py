"""Application settings loaded from environment variables and ``.env`` files."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, NonNegativeFloat, NonNegativeInt, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Primary application settings for the tubescribe server and CLI."""

    default_language: str = Field(default="en", min_length=2, max_length=10, alias="TUBESCRIBE_DEFAULT_LANGUAGE")
    context_entries: NonNegativeInt = Field(default=5, alias="TUBESCRIBE_CONTEXT_ENTRIES")

    fetch_timeout_seconds: PositiveFloat = Field(default=30.0, alias="TUBESCRIBE_FETCH_TIMEOUT_SECONDS")
    fetch_retry_attempts: PositiveInt = Field(default=3, alias="TUBESCRIBE_FETCH_RETRY_ATTEMPTS")
    fetch_retry_backoff_seconds: NonNegativeFloat = Field(default=1.5, alias="TUBESCRIBE_FETCH_RETRY_BACKOFF_SECONDS")

    server_name: str = Field(default="youtube-transcriber", alias="TUBESCRIBE_SERVER_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()


__all__ = ["Settings", "get_settings"]
