"""
PitchScore – Application configuration.
Reads environment variables from a .env file via pydantic-settings.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──
    APP_NAME: str = "PitchScore"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # ── Server ──
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ── Database ──
    DATABASE_URL: str = Field(min_length=1)

    # ── JWT ──
    JWT_SECRET: str = Field(min_length=1)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # ── Password hashing (argon2id) ──
    ARGON2_TIME_COST: int = 3
    ARGON2_MEMORY_COST: int = 65536
    ARGON2_PARALLELISM: int = 4


@lru_cache
def get_settings() -> Settings:
    """Build the settings once from the environment."""
    return Settings()
