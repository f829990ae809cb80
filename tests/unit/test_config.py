"""Unit tests for environment configuration."""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from pwappy_e2e.config import get_headless_mode, load_settings
from pwappy_e2e.models import BrowserName, ConfigurationError, ErrorCode


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_defaults(self, env: Mapping[str, str]) -> None:
        """Test that optional variables fall back to their defaults."""
        settings = load_settings(env)

        assert settings.base_url == "https://dashboard.pwappy.test/"
        assert settings.cookies.auth_token == "auth-secret-123"
        assert settings.cookies.ident_key == "ident-secret-456"
        assert settings.run_suffix == "local"
        assert settings.headless is True
        assert settings.browser == BrowserName.CHROMIUM
        assert settings.mobile is False

    def test_optional_overrides(self, env: Mapping[str, str]) -> None:
        """Test that optional variables are honored."""
        settings = load_settings(
            {
                **env,
                "TEST_RUN_SUFFIX": "ci-42",
                "PWAPPY_TEST_HEADLESS": "false",
                "PWAPPY_TEST_BROWSER": "WebKit",
                "PWAPPY_TEST_MOBILE": "true",
            }
        )

        assert settings.run_suffix == "ci-42"
        assert settings.headless is False
        assert settings.browser == BrowserName.WEBKIT
        assert settings.mobile is True

    def test_cookie_domain_is_host(self, env: Mapping[str, str]) -> None:
        """Test that cookies are scoped to the base URL's host name."""
        settings = load_settings({**env, "PWAPPY_TEST_BASE_URL": "https://dash.example.com:8443/app"})
        assert settings.cookie_domain == "dash.example.com"

    def test_missing_variables(self) -> None:
        """Test that every missing required variable is reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({"PWAPPY_TEST_BASE_URL": "https://dashboard.pwappy.test/"})

        assert exc_info.value.code == ErrorCode.MISSING_CONFIGURATION
        assert exc_info.value.details["missing"] == ["PWAPPY_TEST_AUTH", "PWAPPY_TEST_IDENT_KEY"]

    def test_empty_value_counts_as_missing(self, env: Mapping[str, str]) -> None:
        """Test that an empty string does not satisfy a required variable."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({**env, "PWAPPY_TEST_AUTH": ""})
        assert exc_info.value.details["missing"] == ["PWAPPY_TEST_AUTH"]

    def test_relative_base_url_is_invalid(self, env: Mapping[str, str]) -> None:
        """Test that a URL without a host is rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({**env, "PWAPPY_TEST_BASE_URL": "/dashboard"})
        assert exc_info.value.code == ErrorCode.INVALID_CONFIGURATION

    def test_unsupported_browser(self, env: Mapping[str, str]) -> None:
        """Test that unknown browser engines are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({**env, "PWAPPY_TEST_BROWSER": "opera"})
        assert exc_info.value.code == ErrorCode.INVALID_CONFIGURATION
        assert exc_info.value.details["value"] == "opera"


class TestGetHeadlessMode:
    """Tests for get_headless_mode function."""

    def test_default_is_headless(self) -> None:
        """Test that headless is the default."""
        assert get_headless_mode({}) is True

    @pytest.mark.parametrize("value", ["false", "False", "0", "no"])
    def test_false_values(self, value: str) -> None:
        """Test that false-like values show the browser."""
        assert get_headless_mode({"PWAPPY_TEST_HEADLESS": value}) is False

    def test_true_value(self) -> None:
        """Test that other values keep headless mode."""
        assert get_headless_mode({"PWAPPY_TEST_HEADLESS": "true"}) is True
