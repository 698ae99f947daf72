"""
Configuration Management for Finance Assistant

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from typing import Literal, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GroqSettings(BaseSettings):
    """Groq chat-completion service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GROQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    api_key: str = Field(
        ...,
        description="Groq API key"
    )
    base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="OpenAI-compatible endpoint of the completion service"
    )
    model_name: str = Field(
        default="llama-3.3-70b-versatile",
        description="Model used for every completion request"
    )
    temperature: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature (service default when unset)"
    )

    # Failure policy
    max_attempts: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Attempts per completion request (1 = no retry)"
    )
    retry_min_wait_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Shortest backoff between attempts"
    )
    retry_max_wait_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Longest backoff between attempts"
    )
    request_timeout_seconds: float = Field(
        default=600.0,
        gt=0,
        description="Timeout for a single completion request"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Persona
    assistant_name: str = Field(
        default="Josh",
        description="Name the assistant introduces itself with"
    )

    # Currency (single, fixed per process)
    currency_code: str = Field(
        default="BDT",
        min_length=1,
        description="Suffix appended to every formatted amount"
    )
    currency_label: str = Field(
        default="Bangladeshi Tk",
        description="Human-readable currency name"
    )

    # Chat loop
    exit_command: str = Field(
        default="bye",
        min_length=1,
        description="Input line that ends the session"
    )
    report_tool_errors: bool = Field(
        default=False,
        description=(
            "Feed bad tool arguments and unknown tool names back to the "
            "model as tool results instead of crashing / answering empty"
        )
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level for stderr output"
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log renderer"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily so a missing API key only fails
    # at first use of the completion service

    @property
    def groq(self) -> GroqSettings:
        return GroqSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, Union[bool, str]]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus {setting_name}_error
    with the validation message for each invalid section.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.groq
        results["groq"] = True
    except Exception as e:
        results["groq"] = False
        results["groq_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
