"""Settings for the kernel selector.

All values can be overridden with ``KERNEL_SELECTOR_*`` environment variables
or a ``.env`` file, e.g. ``KERNEL_SELECTOR_BASE_URL=http://localhost:8888/``.
"""

import re
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# URL pattern for HTTP/HTTPS endpoints
_URL_PATTERN = re.compile(r'^https?://[^\s/$.?#].[^\s]*$', re.IGNORECASE)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Kernel selector settings."""

    # =========================================================================
    # NOTEBOOK SERVER
    # =========================================================================
    base_url: str = "http://localhost:8888/"

    # =========================================================================
    # TIMEOUTS
    # =========================================================================
    request_timeout: float = Field(default=30.0, gt=0.0, le=600.0)
    extension_timeout: float = Field(default=10.0, gt=0.0, le=600.0)

    # =========================================================================
    # LOGGING
    # =========================================================================
    log_level: str = "INFO"
    log_json: bool = True

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator('base_url', mode='after')
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Validate that the base URL is an HTTP/HTTPS URL."""
        if not _URL_PATTERN.match(v):
            raise ValueError(f"Invalid URL format: {v}. Must be http:// or https://")
        return v

    @field_validator('log_level', mode='after')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Valid: {sorted(_LOG_LEVELS)}")
        return level

    model_config = SettingsConfigDict(
        env_prefix="KERNEL_SELECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# =============================================================================
# GLOBAL SETTINGS (Lazy Initialization)
# =============================================================================

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance.

    Creates a new Settings instance lazily if none exists.
    Prefer dependency injection over this global getter for testability.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings_instance: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings_instance


def reset_settings() -> None:
    """Reset the global settings instance (forces reload from environment)."""
    global _settings
    _settings = None


__all__ = ["Settings", "get_settings", "set_settings", "reset_settings"]
