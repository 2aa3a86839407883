"""Application configuration with validation."""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from the environment or a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Survey Scoring Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # In-memory store seed data (surveys.json, responses.json, ...)
    DATA_DIR: Optional[Path] = None

    # Analytics
    COMPLETION_THRESHOLD: float = Field(
        default=80.0,
        ge=0,
        le=100,
        description="Responses with completionPercentage >= this count as completed",
    )
    MIN_RESPONSES_MEANINGFUL: int = Field(
        default=5,
        ge=1,
        description="Below this many responses analytics carry a low-responses warning",
    )
    DEFAULT_TREND_GRANULARITY: Literal["daily", "weekly", "monthly"] = "weekly"

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self

    @model_validator(mode="after")
    def validate_data_dir(self):
        """DATA_DIR, when set, must point at a directory."""
        if self.DATA_DIR is not None and not self.DATA_DIR.is_dir():
            raise ValueError(f"DATA_DIR is not a directory: {self.DATA_DIR}")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
