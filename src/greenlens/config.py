"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    activity_api_url: str = "http://localhost:5555/api"
    activity_fetch_limit: int = 1000
    request_timeout_seconds: float = 15
    timezone: str = "UTC"
    report_theme: Literal["light", "dark"] = "light"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
