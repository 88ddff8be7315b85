# src/browser_assertions/config/settings.py
"""
Configuration Management with Pydantic v2

Settings are loaded from (highest priority first):
1. Environment variables prefixed with ``BROWSER_ASSERTIONS_``
2. ``.env.local`` and ``.env`` files in the working directory
3. Default values

Nested sections use ``__`` as delimiter, e.g.
``BROWSER_ASSERTIONS_LOGGING__LEVEL=DEBUG`` or
``BROWSER_ASSERTIONS_ASSERTIONS__LOG_VALUES=false``.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from pydantic import (
    BaseModel,
    Field,
    field_validator,
    model_validator,
    ConfigDict
)
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Execution environments with specific behaviors."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"


class LoggingSettings(BaseModel):
    """Centralized logging configuration."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    json_format: bool = Field(
        default=False,
        description="Render log records as JSON instead of console lines"
    )

    # Output destinations
    console_enabled: bool = Field(default=True)
    file_enabled: bool = Field(default=False)
    file_path: Path = Field(default=Path("logs/assertions.log"))

    # File rotation
    max_file_size_mb: int = Field(default=50, ge=1, le=1000)
    backup_count: int = Field(default=5, ge=1, le=30)

    correlation_id_enabled: bool = Field(default=True)

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v_upper


class AssertionSettings(BaseModel):
    """
    Assertion reporting behavior.

    None of these settings change whether an assertion passes; they only
    control how outcomes are logged and how values are rendered into
    default failure messages.
    """
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    log_passed: bool = Field(
        default=True,
        description="Log passing assertions at INFO (DEBUG when disabled)"
    )

    log_values: bool = Field(
        default=True,
        description="Include actual/expected values in assertion log records"
    )

    max_value_length: int = Field(
        default=500,
        ge=20,
        le=100000,
        description="Truncate page values longer than this in default messages"
    )


class BrowserSettings(BaseModel):
    """Settings applied by the Playwright browser adapter."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    timeout: int = Field(
        default=30000,
        ge=1000,
        le=300000,
        description="Navigation timeout in milliseconds (1s-5min)"
    )

    wait_until: str = Field(
        default="load",
        description="Navigation lifecycle event to wait for"
    )

    @field_validator("wait_until")
    @classmethod
    def validate_wait_until(cls, v: str) -> str:
        """Validate navigation wait condition."""
        valid = {"load", "domcontentloaded", "networkidle", "commit"}
        if v not in valid:
            raise ValueError(f"Invalid wait_until: {v}. Choose from {sorted(valid)}")
        return v


class Settings(BaseSettings):
    """
    Main settings with environment-aware loading.

    The configuration adjusts a few defaults based on ``environment``:
    CI runs log JSON so that log collectors can parse assertion records.
    """

    model_config = SettingsConfigDict(
        env_prefix="BROWSER_ASSERTIONS_",
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Execution environment"
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration"
    )

    assertions: AssertionSettings = Field(
        default_factory=AssertionSettings,
        description="Assertion reporting configuration"
    )

    browser: BrowserSettings = Field(
        default_factory=BrowserSettings,
        description="Browser adapter configuration"
    )

    @model_validator(mode="after")
    def configure_environment_defaults(self) -> "Settings":
        """Apply environment-specific configuration adjustments."""
        if self.environment == Environment.CI:
            self.logging.json_format = True
        return self

    def get_logging_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``setup_logging``."""
        return {
            "log_level": self.logging.level,
            "enable_console": self.logging.console_enabled,
            "enable_file": self.logging.file_enabled,
            "log_file_path": self.logging.file_path,
            "enable_json_format": self.logging.json_format,
            "enable_correlation_id": self.logging.correlation_id_enabled,
            "max_file_size_mb": self.logging.max_file_size_mb,
            "backup_count": self.logging.backup_count,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    The cache can be cleared using ``get_settings.cache_clear()``.

    Example:
        >>> settings = get_settings()
        >>> settings.assertions.max_value_length
        500
    """
    return Settings()


def reload_settings() -> Settings:
    """Force reload settings by clearing cache."""
    get_settings.cache_clear()
    return get_settings()
