"""Verification of generated scripts in the preview and on the test page."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from pwappy_e2e.constants import MAIN_SCRIPT_SELECTOR
from pwappy_e2e.models import ArtifactNotFoundError
from pwappy_e2e.utils.text import contains_normalized, normalize_whitespace

if TYPE_CHECKING:
    from playwright.async_api import FrameLocator, Page

logger = logging.getLogger(__name__)

_FETCH_MAIN_SCRIPT_JS = """
async (selector) => {
    const scriptElement = document.querySelector(selector);
    if (!scriptElement) return null;
    const response = await fetch(scriptElement.src);
    return response.ok ? response.text() : null;
}
"""


def assert_contains_normalized(actual: str, expected: str) -> None:
    """Assert that expected appears in actual, ignoring whitespace layout.

    Raises:
        AssertionError: With both normalized strings when containment fails
    """
    if not contains_normalized(actual, expected):
        raise AssertionError(
            f"Expected script not found.\n"
            f"Expected (normalized): {normalize_whitespace(expected)!r}\n"
            f"Actual (normalized): {normalize_whitespace(actual)!r}"
        )


async def collect_preview_scripts(frame: FrameLocator) -> str:
    """Return the text of every <script> in the preview frame, newline-joined."""
    await frame.locator("body").wait_for(state="visible")
    contents = await frame.locator("script").all_text_contents()
    logger.debug("Collected %d preview scripts", len(contents))
    return "\n".join(contents)


async def fetch_main_script(page: Page) -> str | None:
    """Fetch the generated main.js referenced by a test page.

    The request goes through the page's own fetch so it carries the
    page's cookies and origin.

    Args:
        page: Test page opened from the QR code link

    Returns:
        Script text, or None when the tag is absent or the response is not OK
    """
    content = await page.evaluate(_FETCH_MAIN_SCRIPT_JS, MAIN_SCRIPT_SELECTOR)
    return None if content is None else str(content)


async def verify_script_in_test_page(test_page: Page, expected: str | Sequence[str]) -> None:
    """Verify that the test page's main.js contains the expected code.

    Args:
        test_page: Test page opened from the QR code link
        expected: One expected fragment or several, each checked after normalization

    Raises:
        ArtifactNotFoundError: If main.js is not referenced or cannot be fetched
        AssertionError: If an expected fragment is missing
    """
    await test_page.wait_for_load_state("domcontentloaded")

    main_js = await fetch_main_script(test_page)
    if main_js is None:
        raise ArtifactNotFoundError(
            "main.js of the test page was not found or could not be fetched",
            details={"url": test_page.url, "selector": MAIN_SCRIPT_SELECTOR},
        )

    fragments = [expected] if isinstance(expected, str) else list(expected)
    for fragment in fragments:
        assert_contains_normalized(main_js, fragment)
    logger.debug("Verified %d fragment(s) in %s", len(fragments), test_page.url)
