"""Wait primitives for elements that may or may not appear."""

from __future__ import annotations

from typing import TYPE_CHECKING

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

if TYPE_CHECKING:
    from playwright.async_api import Locator


async def is_visible_within(locator: Locator, timeout_ms: int) -> bool:
    """Wait up to timeout_ms for locator to become visible.

    Used for optional UI (success alerts, restore prompts) whose absence
    is a valid state.

    Args:
        locator: Element that may appear
        timeout_ms: Maximum wait in milliseconds

    Returns:
        True if the element became visible, False on timeout
    """
    try:
        await locator.wait_for(state="visible", timeout=timeout_ms)
    except PlaywrightTimeoutError:
        return False
    return True
