"""Configuration management using pydantic-settings."""

from .settings import LoggingSettings, TerrorSettings, clear_settings_cache, get_settings

__all__ = [
    "LoggingSettings",
    "TerrorSettings",
    "clear_settings_cache",
    "get_settings",
]
