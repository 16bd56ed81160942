"""Configuration management using Pydantic Settings"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from SMS_PARSER_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="SMS_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service
    service_name: str = "sms-parser"
    log_level: str = "INFO"
    log_json: bool = False

    # Deduplication
    dedup_window_minutes: int = Field(default=5, ge=0)
    dedup_unidentified_window_seconds: int = Field(default=60, ge=0)

    # Recurring detection
    recurring_min_occurrences: int = Field(default=3, ge=2)
    recurring_amount_tolerance: float = Field(default=0.05, ge=0, lt=1)
    recurring_interval_tolerance: float = Field(default=0.20, ge=0, lt=1)

    # Parsing
    parse_workers: int = Field(default=1, ge=1)


@lru_cache
def get_settings() -> Settings:
    return Settings()
