"""
earlydecoder Settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from typing import List

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EarlyDecoderSettings(BaseSettings):
    """
    earlydecoder configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="ED_",  # All earlydecoder env vars must start with ED_
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: ED_LOG_LEVEL)",
    )

    # Module Loading Configuration
    file_suffixes: List[str] = Field(
        default=[".tf"],
        description='Suffixes of configuration files making up a module (env: ED_FILE_SUFFIXES, JSON list e.g. \'[".tf"]\')',
    )

    strict: bool = Field(
        default=False,
        description="Treat error diagnostics as a failing exit status in the CLI (env: ED_STRICT)",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return value.upper()

    @field_validator("file_suffixes")
    @classmethod
    def _check_suffixes(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("file_suffixes must not be empty")
        return [s if s.startswith(".") else f".{s}" for s in value]


# Global settings instance
_settings: EarlyDecoderSettings | None = None


def _load() -> EarlyDecoderSettings:
    try:
        return EarlyDecoderSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid earlydecoder settings: {e}") from e


def get_settings() -> EarlyDecoderSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        EarlyDecoderSettings instance
    """
    global _settings
    if _settings is None:
        _settings = _load()
    return _settings


def reload_settings() -> EarlyDecoderSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh EarlyDecoderSettings instance
    """
    global _settings
    _settings = _load()
    return _settings
