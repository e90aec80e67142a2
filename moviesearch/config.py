"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OmdbSettings(BaseModel):
    api_key: SecretStr = Field(description="OMDb API key, see https://www.omdbapi.com/apikey.aspx")
    base_url: AnyHttpUrl = Field(default="https://www.omdbapi.com/")
    request_timeout_seconds: int = Field(default=10, ge=1, le=120)

    @field_validator("api_key")
    @classmethod
    def _reject_blank_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("OMDb API key must not be blank")
        return value


class RequestLimitSettings(BaseModel):
    max_requests: int = Field(default=5, ge=0)
    interval_seconds: int = Field(default=10, ge=1)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MOVIES_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    telegram_token: SecretStr
    telegram_proxy: str | None = None
    admin_telegram_id: int | None = None
    default_language: str = "en"
    max_search_sessions: int = Field(default=1000, ge=1)

    omdb: OmdbSettings
    request_limit: RequestLimitSettings = Field(default_factory=RequestLimitSettings)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()  # type: ignore[call-arg]


__all__ = [
    "OmdbSettings",
    "RequestLimitSettings",
    "Settings",
    "get_settings",
]
