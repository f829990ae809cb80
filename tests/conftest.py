"""Pytest configuration and shared fixtures for pwappy-e2e tests.

This module provides mocks of Playwright pages and locators used across
the unit tests.
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Mapping
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Playwright Page/Locator/Keyboard/Mouse methods that are coroutines in the async API
ASYNC_PLAYWRIGHT_METHODS = frozenset(
    {
        "add_cookies",
        "all_inner_texts",
        "all_text_contents",
        "bounding_box",
        "bring_to_front",
        "check",
        "click",
        "close",
        "count",
        "dblclick",
        "down",
        "drag_to",
        "evaluate",
        "fill",
        "focus",
        "get_attribute",
        "goto",
        "inner_text",
        "input_value",
        "is_enabled",
        "is_visible",
        "move",
        "new_page",
        "press",
        "press_sequentially",
        "reload",
        "tap",
        "text_content",
        "up",
        "wait_for",
        "wait_for_load_state",
        "wait_for_timeout",
    }
)
ASYNC_MAGIC_METHODS = frozenset({"__aenter__", "__aexit__", "__anext__"})


class LocatorMock(MagicMock):
    """MagicMock whose Playwright coroutine methods are AsyncMocks.

    Chained locator calls (locator(), filter(), get_by_role(), first, ...)
    stay synchronous LocatorMocks, so helper code can build locator chains
    and await actions on them exactly like the real async API.
    """

    def _get_child_mock(self, /, **kw: Any) -> MagicMock:
        if kw.get("name") in ASYNC_PLAYWRIGHT_METHODS:
            return AsyncMock(**kw)
        if kw.get("_new_name") in ASYNC_MAGIC_METHODS:
            # `async with` support (e.g., context.expect_page())
            return super()._get_child_mock(**kw)
        return LocatorMock(**kw)


def make_page(browser_name: str | None = "chromium") -> LocatorMock:
    """Create a mock Page.

    Args:
        browser_name: Engine reported by page.context.browser, or None for no browser

    Returns:
        LocatorMock standing in for a Playwright Page
    """
    page = LocatorMock()
    if browser_name is None:
        page.context.browser = None
    else:
        page.context.browser.browser_type.name = browser_name
    return page


def make_event_info(value: Any) -> MagicMock:
    """Create the object yielded by `async with context.expect_page()`.

    Its value attribute is awaitable once, like Playwright's EventInfo.
    """

    async def _value() -> Any:
        return value

    info = MagicMock()
    info.value = _value()
    return info


@pytest.fixture
def page() -> LocatorMock:
    """Create a mock editor or dashboard page on Chromium."""
    return make_page()


@pytest.fixture
def patch_expect() -> Generator[Callable[[str], MagicMock]]:
    """Patch Playwright's expect in a module under test.

    Returns:
        Function taking a module path and returning the expect mock; every
        assertion on the returned matcher is an AsyncMock
    """
    patchers: list[Any] = []

    def _patch(module: str) -> MagicMock:
        patcher = patch(f"{module}.expect")
        mock_expect = patcher.start()
        mock_expect.return_value = AsyncMock()
        patchers.append(patcher)
        return mock_expect

    yield _patch

    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def env() -> Mapping[str, str]:
    """Minimal valid environment for load_settings()."""
    return {
        "PWAPPY_TEST_BASE_URL": "https://dashboard.pwappy.test/",
        "PWAPPY_TEST_AUTH": "auth-secret-123",
        "PWAPPY_TEST_IDENT_KEY": "ident-secret-456",
    }
