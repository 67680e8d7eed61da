"""Centralized configuration for hero_credito."""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    PROJECT_NAME: str = "hero_credito"
    LOG_LEVEL: str = "INFO"
    DISABLE_LOGS: bool = False
    ANNUAL_INTEREST_RATE: float = 0.095
    AFFORDABILITY_RATIO: float = 0.30
    TERM_SEARCH_MIN_YEARS: int = 10
    TERM_SEARCH_MAX_YEARS: int = 35
    MAX_ACCEPTED_TERM_YEARS: int = 50
    WHATSAPP_CHANNEL_ENABLED: bool = False
    WHATSAPP_EVOLUTION_BASE_URL: str = "http://localhost:8080"
    WHATSAPP_EVOLUTION_INSTANCE: str = ""
    WHATSAPP_EVOLUTION_API_KEY: str | None = Field(default=None, repr=False)
    WHATSAPP_WEBHOOK_SECRET: str | None = Field(default=None, repr=False)
    WHATSAPP_TIMEOUT_SECONDS: float = 10.0
    WHATSAPP_HISTORY_LIMIT: int = 50

    @field_validator("ANNUAL_INTEREST_RATE")
    def _validate_annual_rate(cls, value: float) -> float:
        if not 0.0 < value < 1.0:
            raise ValueError("ANNUAL_INTEREST_RATE must be between 0 and 1.")
        return value

    @field_validator("AFFORDABILITY_RATIO")
    def _validate_affordability_ratio(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("AFFORDABILITY_RATIO must be greater than 0 and at most 1.")
        return value

    @field_validator(
        "TERM_SEARCH_MIN_YEARS", "TERM_SEARCH_MAX_YEARS", "MAX_ACCEPTED_TERM_YEARS"
    )
    def _validate_term_bounds_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Term search bounds must be greater than 0.")
        return value

    @field_validator("WHATSAPP_HISTORY_LIMIT")
    def _validate_history_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("WHATSAPP_HISTORY_LIMIT must be greater than 0.")
        return value

    @field_validator("WHATSAPP_TIMEOUT_SECONDS")
    def _validate_whatsapp_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("WHATSAPP_TIMEOUT_SECONDS must be greater than 0.")
        return value

    @model_validator(mode="after")
    def _validate_term_range(self) -> "AppSettings":
        if self.TERM_SEARCH_MAX_YEARS < self.TERM_SEARCH_MIN_YEARS:
            raise ValueError(
                "TERM_SEARCH_MAX_YEARS must be greater or equal to TERM_SEARCH_MIN_YEARS."
            )
        return self


def load_settings() -> AppSettings:
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path, override=False)
    return AppSettings()
