"""Application configuration models."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS: tuple[str, ...] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="StreamCatalog", alias="APP_NAME")

    recommendation_limit: int = Field(
        default=5, alias="RECOMMENDATION_LIMIT", ge=1, le=100
    )
    genre_recommendation_limit: int = Field(
        default=5, alias="GENRE_RECOMMENDATION_LIMIT", ge=1, le=100
    )
    filtered_recommendation_limit: int = Field(
        default=10, alias="FILTERED_RECOMMENDATION_LIMIT", ge=1, le=100
    )
    top_watched_limit: int = Field(
        default=10, alias="TOP_WATCHED_LIMIT", ge=1, le=1_000
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        """Accept level names in any case."""

        if value is None or value == "":
            return "INFO"
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return level

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


def configure_logging(config: Settings | None = None) -> None:
    """Install a basic root handler at the configured level."""

    config = config or get_settings()
    logging.basicConfig(level=getattr(logging, config.log_level))


settings = get_settings()
