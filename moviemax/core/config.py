"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    omdb_api_key: str | None = Field(default=None, alias="OMDB_API_KEY")
    omdb_base_url: str = Field(default="https://www.omdbapi.com/", alias="OMDB_BASE_URL")
    omdb_timeout: float | None = Field(default=None, alias="OMDB_TIMEOUT")
    source: Literal["omdb", "static"] = Field(default="omdb", alias="MOVIEMAX_SOURCE")
    search_debounce_seconds: float = Field(default=0.5, alias="SEARCH_DEBOUNCE_SECONDS")
    search_limit: int = Field(default=20, alias="SEARCH_LIMIT")
    category_limit: int = Field(default=10, alias="CATEGORY_LIMIT")
    database_url: str = Field(default="sqlite:///./moviemax.db", alias="DATABASE_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
