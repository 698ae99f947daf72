"""Configuration package."""

from finance_assistant.config.settings import (
    AppSettings,
    GroqSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "GroqSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
