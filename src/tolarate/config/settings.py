# src/tolarate/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables with an optional .env file overlay.

API keys are not regular fields: any variable whose name starts with
GOLDAPI_KEY (GOLDAPI_KEY, GOLDAPI_KEY_2, GOLDAPI_KEY_BACKUP, ...) is one key.
discover_credentials() enumerates them once at startup and the result is
handed to the CredentialPool explicitly.

Files that USE this module:
- tolarate.app (loads settings and discovers API keys at startup)
- tests.test_settings (unit tests)

Files that this module USES:
- tolarate.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import os  # Operating system interface for environment variables
from pathlib import Path  # Object-oriented filesystem paths
from typing import List, Mapping, Optional, Union  # Type hints

from dotenv import dotenv_values  # Read .env files without touching os.environ
from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from tolarate.shared.validators import (
    validate_timezone,  # Validate IANA timezone names
    validate_webhook_url,  # Validate Google Chat webhook URL
)

DEFAULT_ENV_FILE = ".env"
DEFAULT_KEY_PREFIX = "GOLDAPI_KEY"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Price API (GoldAPI.io) ---
    goldapi_base_url: str = Field(default="https://www.goldapi.io/api", alias="GOLDAPI_BASE_URL")
    goldapi_key_prefix: str = Field(default=DEFAULT_KEY_PREFIX, alias="GOLDAPI_KEY_PREFIX")
    quote_currency: str = Field(default="USD", alias="QUOTE_CURRENCY")  # PKR is not offered by GoldAPI
    price_timeout_seconds: int = Field(default=10, alias="PRICE_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Exchange rate ---
    target_currency: str = Field(default="PKR", alias="TARGET_CURRENCY")
    exchange_rate_url: str = Field(
        default="https://open.er-api.com/v6/latest/USD", alias="EXCHANGE_RATE_URL"
    )
    exchange_rate_timeout_seconds: int = Field(
        default=5, alias="EXCHANGE_RATE_TIMEOUT_SECONDS", ge=1, le=60
    )
    # Snapshot of USD/PKR (Nov 2025), used when the rate endpoint is unavailable
    fallback_exchange_rate: float = Field(default=282.81, alias="FALLBACK_EXCHANGE_RATE", gt=0)

    # --- Google Chat ---
    google_chat_webhook_url: str = Field(default="", alias="GOOGLE_CHAT_WEBHOOK_URL")
    webhook_timeout_seconds: int = Field(default=10, alias="WEBHOOK_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Presentation ---
    display_timezone: str = Field(default="Asia/Karachi", alias="DISPLAY_TIMEZONE")

    # --- Persistence ---
    history_file: Path = Field(default=Path("./prices.json"), alias="HISTORY_FILE")

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="TOLARATE_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("quote_currency", "target_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Validate and upper-case a 3-letter currency code."""
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a 3-letter ISO code")
        return v

    @field_validator("goldapi_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("goldapi_key_prefix")
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("GOLDAPI_KEY_PREFIX must not be empty")
        return v.strip()

    @field_validator("google_chat_webhook_url")
    @classmethod
    def validate_webhook(cls, v: str) -> str:
        """Validate webhook URL format (empty means notifications are disabled)."""
        v = v.strip()
        if v and not validate_webhook_url(v):
            raise ValueError("Invalid GOOGLE_CHAT_WEBHOOK_URL format")
        return v

    @field_validator("display_timezone")
    @classmethod
    def validate_display_timezone(cls, v: str) -> str:
        if not validate_timezone(v):
            raise ValueError(f"Unknown DISPLAY_TIMEZONE: {v}")
        return v


def load_settings(env_file: Union[str, Path, None] = DEFAULT_ENV_FILE) -> Settings:
    """
    Build a Settings instance from the environment and the given .env file.

    Args:
        env_file: Path to the .env file, or None to read the environment only

    Returns:
        Validated Settings instance
    """
    return Settings(_env_file=env_file)


def discover_credentials(
    prefix: str = DEFAULT_KEY_PREFIX,
    environ: Optional[Mapping[str, Optional[str]]] = None,
    env_file: Union[str, Path, None] = DEFAULT_ENV_FILE,
) -> List[str]:
    """
    Enumerate API keys from every variable whose name starts with the prefix.

    The process environment is layered over the .env file, so an exported
    variable overrides the same name in .env. Names are matched
    case-sensitively and returned sorted by name; blank values are dropped.

    Args:
        prefix: Variable name prefix (default "GOLDAPI_KEY")
        environ: Environment mapping (defaults to os.environ)
        env_file: Optional .env file to read

    Returns:
        List of non-blank key values (may be empty)
    """
    merged: dict = {}
    if env_file is not None and Path(env_file).is_file():
        merged.update(dotenv_values(env_file))
    merged.update(os.environ if environ is None else environ)

    keys = []
    for name in sorted(merged):
        if name == f"{prefix}_PREFIX" or not name.startswith(prefix):
            continue
        value = merged[name]
        if value and value.strip():
            keys.append(value.strip())
    return keys
