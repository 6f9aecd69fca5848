# src/fxrates/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables or a local .env file.

Files that USE this module:
- fxrates.app (builds provider, store and bot from settings)
- fxrates.adapters.providers.fixer (default URL and HTTP timeout)

Files that this module USES:
- fxrates.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import urllib.parse
from datetime import time, timezone
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fxrates.shared.validators import (
    validate_api_key,
    validate_bot_token,
    validate_hhmm,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Rates provider ---
    rates_api_url: str = Field(default="http://data.fixer.io/api/latest", alias="RATES_API_URL")
    rates_api_key: str = Field(default="", alias="RATES_API_KEY")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Scheduling (UTC wall clock) ---
    refresh_time_utc: str = Field(default="12:00", alias="REFRESH_TIME_UTC")

    # --- Persistence ---
    rates_file: Path = Field(default=Path("./data/rates.json"), alias="RATES_FILE")

    # --- Telegram (only needed when running the bot) ---
    bot_token: str = Field(default="", alias="BOT_TOKEN")

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="FXRATES_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def RATES_URL(self) -> str:
        """Provider URL with the access key appended when one is configured."""
        if not self.rates_api_key:
            return self.rates_api_url
        sep = "&" if urllib.parse.urlparse(self.rates_api_url).query else "?"
        return f"{self.rates_api_url}{sep}access_key={urllib.parse.quote(self.rates_api_key)}"

    @property
    def REFRESH_TIME(self) -> time:
        """Daily refresh time as a timezone-aware (UTC) time."""
        hours, minutes = self.refresh_time_utc.split(":")
        return time(int(hours), int(minutes), tzinfo=timezone.utc)

    @field_validator("bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate bot token format (empty allowed)."""
        if v and not validate_bot_token(v):
            raise ValueError("Invalid BOT_TOKEN format")
        return v

    @field_validator("rates_api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate API key format (empty allowed)."""
        if v and not validate_api_key(v):
            raise ValueError("Invalid RATES_API_KEY format")
        return v

    @field_validator("rates_api_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        parsed = urllib.parse.urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("RATES_API_URL must be an http(s) URL")
        return v

    @field_validator("refresh_time_utc")
    @classmethod
    def validate_refresh_time(cls, v: str) -> str:
        if not validate_hhmm(v):
            raise ValueError("REFRESH_TIME_UTC must be HH:MM (24h)")
        return v


# Global settings instance
settings = Settings()
