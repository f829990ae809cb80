"""Browser lifecycle for E2E runs.

Every test gets a fresh Playwright instance, browser and context so no
state leaks between tests. Auth cookies are injected into the context
before the first navigation.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from playwright.async_api import async_playwright

from pwappy_e2e.models import BrowserName

if TYPE_CHECKING:
    from playwright._impl._api_structures import SetCookieParam
    from playwright.async_api import BrowserContext, Playwright

    from pwappy_e2e.config import E2ESettings

logger = logging.getLogger(__name__)

# Device descriptor used when PWAPPY_TEST_MOBILE is enabled
MOBILE_DEVICE = "Pixel 7"
MOBILE_DEVICE_WEBKIT = "iPhone 14"


def build_auth_cookies(settings: E2ESettings) -> list[SetCookieParam]:
    """Build Playwright cookie params for the auth cookies.

    Args:
        settings: Resolved settings with cookie values and base URL

    Returns:
        Cookie params scoped to the base URL's host and path "/"
    """
    domain = settings.cookie_domain
    return [
        {
            "name": name,
            "value": value,
            "domain": domain,
            "path": "/",
        }
        for name, value in settings.cookies.as_dict().items()
    ]


async def inject_auth_cookies(context: BrowserContext, settings: E2ESettings) -> None:
    """Inject auth cookies into a browser context.

    Args:
        context: Playwright BrowserContext
        settings: Resolved settings
    """
    await context.add_cookies(build_auth_cookies(settings))
    logger.debug("Injected auth cookies for domain: %s", settings.cookie_domain)


def context_options(playwright: Playwright, settings: E2ESettings) -> dict[str, Any]:
    """Return new_context() keyword arguments for the configured viewport.

    Args:
        playwright: Running Playwright instance (for device descriptors)
        settings: Resolved settings

    Returns:
        Device descriptor kwargs when mobile emulation is on, else {}
    """
    if not settings.mobile:
        return {}
    device = MOBILE_DEVICE_WEBKIT if settings.browser == BrowserName.WEBKIT else MOBILE_DEVICE
    options = dict(playwright.devices[device])
    options.pop("default_browser_type", None)
    if settings.browser == BrowserName.FIREFOX:
        # Firefox does not support isMobile
        options.pop("is_mobile", None)
    return options


@asynccontextmanager
async def launch_browser_context(
    settings: E2ESettings,
    *,
    headless: bool | None = None,
) -> AsyncGenerator[BrowserContext]:
    """Open an authenticated browser context with automatic cleanup.

    Args:
        settings: Resolved settings (browser engine, viewport, cookies)
        headless: Overrides settings.headless when given

    Yields:
        BrowserContext with auth cookies already set
    """
    if headless is None:
        headless = settings.headless

    playwright = await async_playwright().start()
    browser_type = getattr(playwright, settings.browser.value)
    browser = await browser_type.launch(headless=headless)
    context = await browser.new_context(**context_options(playwright, settings))
    logger.debug("Launched %s (headless=%s, mobile=%s)", settings.browser.value, headless, settings.mobile)

    try:
        await inject_auth_cookies(context, settings)
        yield context
    finally:
        await context.close()
        await browser.close()
        await playwright.stop()
