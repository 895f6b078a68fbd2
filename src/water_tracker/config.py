"""Application configuration."""

import os
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from water_tracker.services.usage import validate_budget

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    session_secret: str
    session_https_only: bool = False
    session_max_age_seconds: int = 14 * 24 * 60 * 60
    daily_budget_gallons: float = 80
    timezone: str = "UTC"
    history_source: Literal["demo", "persisted"] = "demo"
    demo_seed: int | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("daily_budget_gallons")
    @classmethod
    def _check_budget(cls, value: float) -> float:
        return validate_budget(value)

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if not is_valid_timezone(value):
            raise ValueError(f"Unknown timezone: {value}")
        return value


def is_valid_timezone(value: str) -> bool:
    """Return True when zoneinfo knows the timezone name."""
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
