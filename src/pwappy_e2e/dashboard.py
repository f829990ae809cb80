"""Dashboard helpers: application lifecycle around each editor test.

Every test creates its own application, opens it in the editor, and
deletes it in teardown. sweep_apps removes applications left behind by
aborted runs.
"""

from __future__ import annotations

import logging
import re
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import expect

from pwappy_e2e.constants import (
    ADD_APP_TITLE,
    ALERT_COMPONENT,
    ANY_DASHBOARD_LOADING_OVERLAY,
    APP_DELETE_TIMEOUT_MS,
    APP_KEY_INPUT,
    APP_LIST_HEADING,
    APP_LIST_ROWS,
    APP_MODAL,
    APP_NAME_INPUT,
    CLOSE_BUTTON_LABEL,
    DASHBOARD_LOADING_OVERLAY,
    DEFAULT_APP_VERSION,
    DEFAULT_ELEMENT_WAIT_TIMEOUT_MS,
    DEFAULT_NAVIGATION_TIMEOUT_MS,
    DELETE_BUTTON_LABEL,
    DELETE_CONFIRM_DIALOG,
    DELETE_CONFIRM_LABEL,
    EDITOR_BUTTON_LABEL,
    EDITOR_ROOT,
    LOADING_OVERLAY_TIMEOUT_MS,
    PROCESSING_TEXT,
    PUBLISH_ACTION_CONFIRM_DIALOG,
    PUBLISH_HEADING,
    PUBLISH_LIST_ROWS,
    PUBLISHED_STATUS_TEXT,
    RESTORE_BUTTON_LABEL,
    RESTORE_CONFIRM_DIALOG,
    RESTORE_CONFIRM_LABEL,
    SAVE_BUTTON_LABEL,
    SELECT_BUTTON_LABEL,
    UNPUBLISH_BUTTON_LABEL,
    UNPUBLISH_CONFIRM_LABEL,
    VERSION_HEADING,
    VERSION_LIST_ROWS,
)
from pwappy_e2e.editor.helper import EditorHelper
from pwappy_e2e.models import DashboardTab, SweepResult
from pwappy_e2e.retry import with_retry

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

    from pwappy_e2e.models import AppIdentity

logger = logging.getLogger(__name__)

_MODAL_HEADER_TITLE = 'span[slot="header-title"]'
_FIRST_CELL = "td:first-child"


async def _wait_for_processing(page: Page, timeout_ms: int | None = None) -> None:
    await page.get_by_text(PROCESSING_TEXT).wait_for(state="hidden", timeout=timeout_ms)


async def open_dashboard(page: Page, base_url: str) -> None:
    """Navigate to the dashboard and wait for the application list.

    Args:
        page: Page in an authenticated context
        base_url: Dashboard URL
    """
    await page.goto(base_url, wait_until="domcontentloaded", timeout=DEFAULT_NAVIGATION_TIMEOUT_MS)
    await expect(page.get_by_role("heading", name=APP_LIST_HEADING)).to_be_visible()
    logger.debug("Dashboard loaded: %s", base_url)


async def navigate_to_tab(page: Page, tab: DashboardTab | str) -> None:
    tab = DashboardTab(tab)
    await page.locator(f"#{tab.value}").click()
    await _wait_for_processing(page)
    await expect(page.locator(DASHBOARD_LOADING_OVERLAY)).to_be_hidden()


async def create_app(page: Page, identity: AppIdentity) -> None:
    """Create an application from the dashboard's add dialog.

    Args:
        page: Dashboard page
        identity: Name and key of the new application
    """
    await page.get_by_title(ADD_APP_TITLE).click()

    app_modal = page.locator(APP_MODAL)
    # The modal host has no box of its own; its header is what becomes visible
    await expect(app_modal.locator(_MODAL_HEADER_TITLE)).to_be_visible()

    name_input = page.locator(APP_NAME_INPUT)
    await expect(name_input).to_be_focused()
    await expect(name_input).to_be_editable(timeout=DEFAULT_ELEMENT_WAIT_TIMEOUT_MS)
    await name_input.fill(identity.name)

    key_input = page.locator(APP_KEY_INPUT)
    await expect(key_input).to_be_editable(timeout=DEFAULT_ELEMENT_WAIT_TIMEOUT_MS)
    await key_input.press_sequentially(identity.key)

    await expect(name_input).to_have_value(identity.name)
    await expect(key_input).to_have_value(identity.key)

    await app_modal.get_by_role("button", name=SAVE_BUTTON_LABEL).click()
    await _wait_for_processing(page)
    await expect(page.locator(DASHBOARD_LOADING_OVERLAY)).to_be_hidden()
    await expect(app_modal).to_be_hidden()
    logger.info("Created app: %s (%s)", identity.name, identity.key)


async def _confirm_delete(page: Page, delete_button: Locator) -> None:
    await delete_button.click()
    await _wait_for_processing(page, LOADING_OVERLAY_TIMEOUT_MS)

    confirm_dialog = page.locator(DELETE_CONFIRM_DIALOG)
    await expect(confirm_dialog).to_be_visible()
    await confirm_dialog.get_by_role("button", name=DELETE_CONFIRM_LABEL).click()

    # Server-side deletion can take much longer than the first round trip
    await _wait_for_processing(page, APP_DELETE_TIMEOUT_MS)
    await expect(page.locator(ANY_DASHBOARD_LOADING_OVERLAY)).to_be_hidden()


async def delete_app(page: Page, key: str) -> None:
    """Delete an application from the workbench.

    Does nothing when no row contains the key.

    Args:
        page: Dashboard page
        key: Application key
    """
    await page.bring_to_front()
    await navigate_to_tab(page, DashboardTab.WORKBENCH)

    app_row = page.locator(APP_LIST_ROWS).filter(has_text=key)
    if await app_row.count() == 0:
        logger.debug("App %s not in workbench, nothing to delete", key)
        return

    await _confirm_delete(page, app_row.get_by_role("button", name=DELETE_BUTTON_LABEL))
    logger.info("Deleted app: %s", key)


async def delete_app_quietly(page: Page, key: str) -> bool:
    """Delete an application, retrying timeouts, without ever raising.

    Teardown must not mask the test body's failure, so errors are logged.

    Args:
        page: Dashboard page
        key: Application key

    Returns:
        True if deletion finished (or nothing was there), False otherwise
    """
    try:
        await with_retry(lambda: delete_app(page, key), description=f"delete {key}")
    except Exception as e:
        logger.warning("Failed to delete app %s: %s: %s", key, type(e).__name__, e)
        return False
    return True


async def open_editor(page: Page, name: str, version: str = DEFAULT_APP_VERSION) -> Page:
    """Open an application version in the editor.

    The editor opens in a new tab of the same context. A pending
    snapshot restore offer is discarded before the page is returned.

    Args:
        page: Dashboard page
        name: Application name
        version: Version to open

    Returns:
        Editor page with the editor shell visible
    """
    app_row = page.locator(APP_LIST_ROWS).filter(has_text=name)
    await expect(app_row).to_be_visible()
    select_button = app_row.get_by_role("button", name=SELECT_BUTTON_LABEL)
    await expect(select_button).to_be_visible()
    await expect(select_button).to_be_enabled()
    await select_button.click()
    await _wait_for_processing(page)
    await expect(page.get_by_role("heading", name=VERSION_HEADING)).to_be_visible()

    version_row = page.locator(VERSION_LIST_ROWS).filter(has_text=version)
    async with page.context.expect_page() as page_info:
        await version_row.get_by_role("button", name=EDITOR_BUTTON_LABEL).click()
    editor_page = await page_info.value
    await editor_page.wait_for_load_state("domcontentloaded")

    await EditorHelper(editor_page).handle_snapshot_restore_dialog()

    await expect(editor_page.locator(EDITOR_ROOT)).to_be_visible()
    await _wait_for_processing(page)
    logger.info("Opened editor for %s %s", name, version)
    return editor_page


@asynccontextmanager
async def editor_session(page: Page, identity: AppIdentity) -> AsyncGenerator[Page]:
    """Create an application, open it in the editor, and clean up on exit.

    Deletion runs even when create_app fails: the server may have
    created the row before a later wait timed out, and delete_app is a
    no-op when the row is absent.

    Args:
        page: Dashboard page
        identity: Name and key of the application

    Yields:
        Editor page
    """
    try:
        await create_app(page, identity)
        editor_page = await open_editor(page, identity.name)
        try:
            yield editor_page
        finally:
            await editor_page.close()
    finally:
        await delete_app_quietly(page, identity.key)


async def expect_app_visibility(page: Page, name: str, visible: bool) -> None:
    """Assert that the application list shows (or does not show) name exactly."""
    await page.wait_for_load_state("networkidle")
    name_cell = page.locator(f"{APP_LIST_ROWS} {_FIRST_CELL}").filter(has_text=re.compile(f"^{re.escape(name)}$"))
    if visible:
        await expect(name_cell).to_be_visible()
    else:
        await expect(name_cell).to_be_hidden()


async def _unpublish_all_versions(page: Page, name: str) -> None:
    await navigate_to_tab(page, DashboardTab.PUBLISH)
    await expect(page.get_by_role("heading", name=PUBLISH_HEADING)).to_be_visible(
        timeout=DEFAULT_ELEMENT_WAIT_TIMEOUT_MS
    )

    app_row = page.locator(APP_LIST_ROWS).filter(has_text=name)
    await app_row.get_by_role("button", name=SELECT_BUTTON_LABEL).click()
    await _wait_for_processing(page)

    while True:
        await page.wait_for_load_state("networkidle")
        published_row = page.locator(PUBLISH_LIST_ROWS).filter(has_text=PUBLISHED_STATUS_TEXT).first
        if await published_row.count() == 0:
            break

        version = (await published_row.locator("td").first.inner_text()).strip()
        logger.info("Unpublishing %s %s", name, version)
        await published_row.get_by_role("button", name=UNPUBLISH_BUTTON_LABEL, exact=True).click()
        await _wait_for_processing(page)

        confirm_dialog = page.locator(PUBLISH_ACTION_CONFIRM_DIALOG)
        await expect(confirm_dialog).to_be_visible()
        await confirm_dialog.get_by_role("button", name=UNPUBLISH_CONFIRM_LABEL).click()
        await _wait_for_processing(page)
        await expect(page.locator(DASHBOARD_LOADING_OVERLAY)).to_be_hidden()

        # Re-query by version: the list is re-rendered after each change
        version_row = page.locator(PUBLISH_LIST_ROWS).filter(has_text=version)
        await expect(version_row).not_to_contain_text(PUBLISHED_STATUS_TEXT)


async def _restore_to_workbench(page: Page, archived_row: Locator) -> None:
    await archived_row.get_by_role("button", name=RESTORE_BUTTON_LABEL).click()
    await _wait_for_processing(page)

    restore_dialog = page.locator(RESTORE_CONFIRM_DIALOG)
    await expect(restore_dialog).to_be_visible()
    await restore_dialog.get_by_role("button", name=RESTORE_CONFIRM_LABEL).click()
    await _wait_for_processing(page)
    await expect(page.locator(ANY_DASHBOARD_LOADING_OVERLAY)).to_be_hidden()

    alert = page.locator(ALERT_COMPONENT)
    await expect(alert).to_be_visible()
    await alert.get_by_role("button", name=CLOSE_BUTTON_LABEL).click()


async def _sweep_one(page: Page, tab: DashboardTab, name: str) -> None:
    app_row = page.locator(APP_LIST_ROWS).filter(has_text=name).first
    delete_button = app_row.get_by_role("button", name=DELETE_BUTTON_LABEL)

    if not await delete_button.is_enabled():
        # Published apps cannot be deleted until every version is unpublished
        logger.info("Delete disabled for %s, unpublishing first", name)
        if tab is DashboardTab.ARCHIVE:
            await _restore_to_workbench(page, app_row)
        await _unpublish_all_versions(page, name)
        await navigate_to_tab(page, DashboardTab.WORKBENCH)
        app_row = page.locator(APP_LIST_ROWS).filter(has_text=name).first
        delete_button = app_row.get_by_role("button", name=DELETE_BUTTON_LABEL)
        await expect(delete_button).to_be_enabled()

    await _confirm_delete(page, delete_button)
    await expect(page.locator(APP_LIST_ROWS).filter(has_text=name)).to_be_hidden()


async def sweep_apps(page: Page, prefix: str) -> SweepResult:
    """Delete every application whose name starts with prefix.

    Runs over the workbench, then the archive. Each application is
    attempted at most once; failures are collected, not raised.

    Args:
        page: Dashboard page
        prefix: Name prefix of applications to delete (e.g., "test-app-")

    Returns:
        SweepResult listing deleted and failed applications
    """
    result = SweepResult()
    attempted: set[str] = set()

    for tab in (DashboardTab.WORKBENCH, DashboardTab.ARCHIVE):
        while True:
            await navigate_to_tab(page, tab)
            await page.wait_for_load_state("networkidle")

            names = [
                text.strip() for text in await page.locator(f"{APP_LIST_ROWS} {_FIRST_CELL}").all_inner_texts()
            ]
            candidates = [n for n in names if n.startswith(prefix) and n not in attempted]
            if not candidates:
                logger.info("No leftover apps in %s", tab.value)
                break

            name = candidates[0]
            attempted.add(name)
            logger.info("[%s] Deleting %s", tab.value, name)
            try:
                await _sweep_one(page, tab, name)
            except (PlaywrightError, AssertionError) as e:
                logger.warning("Failed to delete %s: %s: %s", name, type(e).__name__, e)
                result.failed[name] = str(e)
            else:
                result.deleted.append(name)

    return result
