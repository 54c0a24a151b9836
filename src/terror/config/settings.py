"""Environment-based configuration using pydantic-settings.

Example:
    >>> from terror.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # TERROR_TRIM_PREFIX=/home/ci/checkout/
    # TERROR_LOG_LEVEL=DEBUG
    # TERROR_LOG_FORMAT=json
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TERROR_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force ANSI colors on/off; None auto-detects a TTY")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class TerrorSettings(BaseSettings):
    """Root settings.

    Example environment variables:
        TERROR_TRIM_PREFIX=/build/src/
        TERROR_LOG_LEVEL=DEBUG
        TERROR_LOGGING__FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="TERROR_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    trim_prefix: str | None = Field(
        default=None,
        description="Path prefix removed from captured file names",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("trim_prefix", mode="after")
    @classmethod
    def _ensure_trailing_sep(cls, v: str | None) -> str | None:
        """A directory prefix always ends with a separator, so file names stay relative."""
        if not v:
            return None
        return v if v.endswith(("/", os.sep)) else v + os.sep


@lru_cache(maxsize=1)
def get_settings() -> TerrorSettings:
    """Get the global settings instance (cached)."""
    return TerrorSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
