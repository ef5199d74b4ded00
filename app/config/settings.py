from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Centralised application settings loaded from environment/.env."""

    bot_token: str | None = Field(None, description="Telegram bot token.")

    password_min_length: int = Field(
        1,
        description="Minimum password length accepted by the registration schema.",
    )
    log_level: str = Field("INFO", description="Root logging level.")

    class Config:
        env_file = Path(".env")
        env_file_encoding = "utf-8"

    @field_validator("password_min_length")
    def check_password_min_length(cls, value: int) -> int:
        if value < 1:
            raise ValueError("password_min_length must be at least 1")
        return value

    @field_validator("log_level", mode="before")
    def normalise_log_level(cls, value: str) -> str:
        return str(value).strip().upper()


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
