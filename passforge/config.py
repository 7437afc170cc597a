"""PassForge settings, read from the environment and an optional ``.env``."""

import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PASSFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Generative Language API
    api_key: str | None = Field(default=None, validate_default=True, description="Generative Language API key")
    model: str = "gemini-2.0-flash"
    api_base: str = "https://generativelanguage.googleapis.com"
    request_timeout: float = Field(default=30.0, gt=0, description="Seconds per analysis request")

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("api_key", mode="before")
    @classmethod
    def fallback_api_key(cls, v):
        # Accept the key names the Google SDKs use
        return v or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")

    @field_validator("api_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
