"""Environment-based configuration using pydantic-settings.

Example:
    >>> from resultkit.settings import get_settings
    >>> get_settings().logging.level
    'WARNING'

    # Or with environment variables:
    # RESULTKIT_LOG_LEVEL=DEBUG
    # RESULTKIT_LOG_FORMAT=json
    # RESULTKIT_LOG_CONTRACT_VIOLATIONS=false
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTKIT_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force ANSI colors on or off; None auto-detects a TTY")

    @field_validator("level", "format", mode="before")
    @classmethod
    def _normalize(cls, v: str, info: ValidationInfo) -> str:
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "level" else v.lower()


class ResultKitSettings(BaseSettings):
    """Root settings for resultkit.

    Loads configuration from environment variables with the RESULTKIT_ prefix.

    Example environment variables:
        RESULTKIT_DEBUG=true
        RESULTKIT_LOG_CAPTURED_FAILURES=false
        RESULTKIT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="RESULTKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Log at DEBUG level regardless of logging.level")
    log_contract_violations: bool = Field(
        default=True, description="Emit a warning when a declared-safe operation raises",
    )
    log_captured_failures: bool = Field(
        default=True, description="Emit a debug event for every failure run_safely captures",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> ResultKitSettings:
    """Get the global settings instance (cached)."""
    return ResultKitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    The next get_settings() call reloads configuration from the environment.
    """
    get_settings.cache_clear()
