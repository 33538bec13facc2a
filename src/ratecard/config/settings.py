# src/ratecard/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables with validation.

Files that USE this module:
- ratecard.app (loads settings for wiring and logging)
- ratecard.adapters.providers.* (provider URL and HTTP timeout)
- ratecard.adapters.persistence.* (state file path and storage keys)
- ratecard.application.* (trend jitter and history length)
- ratecard.shared.language (default language)

Files that this module USES:
- ratecard.shared.validators (currency code validation)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from ratecard.shared.validators import validate_currency_code


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Rate provider ---
    rates_api_url: str = Field(
        default="https://api.exchangerate-api.com/v4/latest/USD", alias="RATES_API_URL"
    )
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Persistence ---
    state_file: Path = Field(default=Path("./data/ratecard_state.json"), alias="STATE_FILE")
    state_key: str = Field(default="exchangeAppState", alias="STATE_KEY", min_length=1)
    base_currency_key: str = Field(default="baseCurrency", alias="BASE_CURRENCY_KEY", min_length=1)

    # --- Conversion ---
    default_base_currency: str = Field(default="USD", alias="DEFAULT_BASE_CURRENCY")

    # --- Trend heuristics (simulated, not market history) ---
    trend_jitter_pct: float = Field(default=1.5, alias="TREND_JITTER_PCT", ge=0.0, le=50.0)
    history_jitter_pct: float = Field(default=2.0, alias="HISTORY_JITTER_PCT", ge=0.0, le=50.0)
    history_days: int = Field(default=7, alias="HISTORY_DAYS", ge=2, le=31)

    # --- Language Settings ---
    default_language: str = Field(default="es", alias="DEFAULT_LANGUAGE")

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="RATECARD_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("default_base_currency")
    @classmethod
    def validate_base_currency(cls, v: str) -> str:
        """Normalise and validate the default base currency."""
        code = v.strip().upper()
        if not validate_currency_code(code):
            raise ValueError(f"DEFAULT_BASE_CURRENCY must be a supported currency, got {v!r}")
        return code

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate language code."""
        if v not in ["en", "es"]:
            raise ValueError("DEFAULT_LANGUAGE must be 'en' or 'es'")
        return v


# Global settings instance
settings = Settings()
