# tests/unit/test_settings.py
"""Unit tests for settings loading."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from browser_assertions.config.settings import (
    AssertionSettings,
    BrowserSettings,
    Environment,
    LoggingSettings,
    Settings,
    get_settings,
    reload_settings
)


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.logging.level == "INFO"
        assert settings.logging.json_format is False
        assert settings.assertions.log_passed is True
        assert settings.assertions.max_value_length == 500
        assert settings.browser.timeout == 30000
        assert settings.browser.wait_until == "load"

    def test_nested_environment_variables(self):
        env = {
            "BROWSER_ASSERTIONS_LOGGING__LEVEL": "debug",
            "BROWSER_ASSERTIONS_ASSERTIONS__LOG_VALUES": "false",
            "BROWSER_ASSERTIONS_ASSERTIONS__MAX_VALUE_LENGTH": "80",
            "BROWSER_ASSERTIONS_BROWSER__TIMEOUT": "5000",
        }
        with patch.dict(os.environ, env):
            settings = Settings()

        assert settings.logging.level == "DEBUG"
        assert settings.assertions.log_values is False
        assert settings.assertions.max_value_length == 80
        assert settings.browser.timeout == 5000

    def test_ci_logs_json(self):
        with patch.dict(os.environ, {"BROWSER_ASSERTIONS_ENVIRONMENT": "ci"}):
            settings = Settings()

        assert settings.environment == Environment.CI
        assert settings.logging.json_format is True

    def test_cached_until_reloaded(self):
        first = get_settings()
        assert get_settings() is first

        with patch.dict(os.environ, {"BROWSER_ASSERTIONS_ASSERTIONS__LOG_PASSED": "false"}):
            reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded.assertions.log_passed is False

    def test_logging_options(self):
        options = Settings(logging=LoggingSettings(file_enabled=True, file_path=Path("x.log"))) \
            .get_logging_options()

        assert options["enable_file"] is True
        assert options["log_file_path"] == Path("x.log")
        assert options["log_level"] == "INFO"


class TestSectionValidation:

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")

    def test_invalid_wait_until(self):
        with pytest.raises(ValidationError):
            BrowserSettings(wait_until="idle")

    @pytest.mark.parametrize("timeout", [999, 300001])
    def test_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            BrowserSettings(timeout=timeout)

    def test_max_value_length_lower_bound(self):
        with pytest.raises(ValidationError):
            AssertionSettings(max_value_length=5)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            AssertionSettings(retries=3)
