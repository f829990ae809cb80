"""Environment configuration for pwappy-e2e.

Settings come from environment variables so that CI can inject
credentials without touching the repository.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from urllib.parse import urlparse

from pydantic import BaseModel

from pwappy_e2e.models import AuthCookies, BrowserName, ConfigurationError

# Environment variable names
BASE_URL_ENV_VAR = "PWAPPY_TEST_BASE_URL"
AUTH_ENV_VAR = "PWAPPY_TEST_AUTH"
IDENT_KEY_ENV_VAR = "PWAPPY_TEST_IDENT_KEY"
RUN_SUFFIX_ENV_VAR = "TEST_RUN_SUFFIX"
HEADLESS_ENV_VAR = "PWAPPY_TEST_HEADLESS"
BROWSER_ENV_VAR = "PWAPPY_TEST_BROWSER"
MOBILE_ENV_VAR = "PWAPPY_TEST_MOBILE"

DEFAULT_RUN_SUFFIX = "local"


class E2ESettings(BaseModel):
    """Resolved configuration for one test run.

    Attributes:
        base_url: Dashboard URL of the environment under test
        cookies: Session cookies injected before navigation
        run_suffix: Identifies the run in generated application names
        headless: Whether the browser runs headless
        browser: Browser engine to launch
        mobile: Whether to emulate a mobile viewport
    """

    base_url: str
    cookies: AuthCookies
    run_suffix: str = DEFAULT_RUN_SUFFIX
    headless: bool = True
    browser: BrowserName = BrowserName.CHROMIUM
    mobile: bool = False

    @property
    def cookie_domain(self) -> str:
        """Host name the auth cookies are scoped to."""
        return urlparse(self.base_url).hostname or ""


def _flag(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.lower() not in ("false", "0", "no")


def get_headless_mode(environ: Mapping[str, str] | None = None) -> bool:
    """Get headless mode from PWAPPY_TEST_HEADLESS environment variable.

    Default: True (headless mode for CI/CD stability)
    Set PWAPPY_TEST_HEADLESS=false to show browser window for debugging.

    Returns:
        True if headless mode is enabled (default)
    """
    env = os.environ if environ is None else environ
    return _flag(env.get(HEADLESS_ENV_VAR), True)


def load_settings(environ: Mapping[str, str] | None = None) -> E2ESettings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read instead of os.environ (for tests)

    Returns:
        Resolved E2ESettings

    Raises:
        ConfigurationError: If a required variable is missing or a value is invalid
    """
    env = os.environ if environ is None else environ

    missing = [name for name in (BASE_URL_ENV_VAR, AUTH_ENV_VAR, IDENT_KEY_ENV_VAR) if not env.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}",
            details={"missing": missing},
        )

    base_url = env[BASE_URL_ENV_VAR]
    if not urlparse(base_url).hostname:
        raise ConfigurationError(
            f"{BASE_URL_ENV_VAR} is not an absolute URL: {base_url}",
            details={"value": base_url},
            invalid=True,
        )

    browser_value = env.get(BROWSER_ENV_VAR) or BrowserName.CHROMIUM.value
    try:
        browser = BrowserName(browser_value.lower())
    except ValueError as e:
        raise ConfigurationError(
            f"Unsupported browser in {BROWSER_ENV_VAR}: {browser_value}",
            details={"value": browser_value},
            invalid=True,
        ) from e

    return E2ESettings(
        base_url=base_url,
        cookies=AuthCookies(auth_token=env[AUTH_ENV_VAR], ident_key=env[IDENT_KEY_ENV_VAR]),
        run_suffix=env.get(RUN_SUFFIX_ENV_VAR) or DEFAULT_RUN_SUFFIX,
        headless=get_headless_mode(env),
        browser=browser,
        mobile=_flag(env.get(MOBILE_ENV_VAR), False),
    )
