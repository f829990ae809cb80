"""Onsen UI alert verification inside a page or an embedded frame.

The generated application shows alerts with ons.notification.alert(),
which renders an <ons-alert-dialog>. The same procedure works against
the editor's preview iframe and against the deployed test page.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from playwright.async_api import expect

from pwappy_e2e.constants import ALERT_DIALOG, ALERT_DIALOG_BUTTON, ALERT_WAIT_TIMEOUT_MS

if TYPE_CHECKING:
    from playwright.async_api import Locator

logger = logging.getLogger(__name__)


class LocatorScope(Protocol):
    """Anything that can create locators: a Page or a FrameLocator."""

    def locator(self, selector: str) -> Locator: ...


async def verify_and_close_alert(
    scope: LocatorScope,
    expected_text: str,
    timeout_ms: int = ALERT_WAIT_TIMEOUT_MS,
) -> None:
    """Verify that an alert with the expected text appears, then dismiss it.

    State sequence: absent -> visible (text matches) -> click -> hidden.
    Any deviation fails with the assertion's diagnostic; nothing is retried.

    Args:
        scope: Page or FrameLocator to search in
        expected_text: Text the alert must contain
        timeout_ms: How long to wait for the alert to appear
    """
    alert_dialog = scope.locator(ALERT_DIALOG).filter(has_text=expected_text)
    await expect(alert_dialog).to_be_visible(timeout=timeout_ms)
    await expect(alert_dialog).to_contain_text(expected_text)

    alert_button = alert_dialog.locator(ALERT_DIALOG_BUTTON)
    await expect(alert_button).to_be_visible()
    await expect(alert_button).to_be_enabled()
    await alert_button.click()

    await expect(alert_dialog).to_be_hidden()
    logger.debug("Alert verified and closed: %s", expected_text)
