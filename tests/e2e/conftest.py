"""E2E test fixtures for pwappy-e2e.

Every test gets its own browser context, dashboard page and application.
The application is deleted in teardown whether or not the test passed.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

import pytest
import pytest_asyncio

from pwappy_e2e.browser.session import launch_browser_context
from pwappy_e2e.config import E2ESettings, load_settings
from pwappy_e2e.dashboard import editor_session, open_dashboard
from pwappy_e2e.editor import EditorHelper
from pwappy_e2e.models import AppIdentity, ConfigurationError, generate_app_identity
from pwappy_e2e.utils.logging import setup_logging

if TYPE_CHECKING:
    from playwright.async_api import BrowserContext, Page


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> None:
    setup_logging()


@pytest.fixture
def settings() -> E2ESettings:
    """Resolve the run's settings, skipping when the environment is not configured.

    Raises:
        pytest.skip: If required environment variables are missing
    """
    try:
        return load_settings()
    except ConfigurationError as e:
        pytest.skip(f"E2E tests require PWAPPY_TEST_* environment variables: {e.message}")


@pytest_asyncio.fixture
async def browser_context(settings: E2ESettings) -> AsyncGenerator[BrowserContext]:
    """Authenticated browser context, closed with its browser after the test."""
    async with launch_browser_context(settings) as context:
        yield context


@pytest_asyncio.fixture
async def dashboard_page(browser_context: BrowserContext, settings: E2ESettings) -> Page:
    """Dashboard page showing the application list."""
    page = await browser_context.new_page()
    await open_dashboard(page, settings.base_url)
    return page


@pytest.fixture
def app_identity(settings: E2ESettings) -> AppIdentity:
    return generate_app_identity(settings.run_suffix)


@pytest_asyncio.fixture
async def editor_page(dashboard_page: Page, app_identity: AppIdentity) -> AsyncGenerator[Page]:
    """Create a fresh application and open it in the editor.

    Teardown closes the editor tab and deletes the application
    (best-effort; a failed deletion is logged, not raised). Deletion also
    runs when create_app itself fails, since the server may have created
    the row before a later wait timed out.

    Yields:
        Editor page with any snapshot restore offer already discarded
    """
    async with editor_session(dashboard_page, app_identity) as page:
        yield page


@pytest.fixture
def editor_helper(editor_page: Page, settings: E2ESettings) -> EditorHelper:
    return EditorHelper(editor_page, is_mobile=settings.mobile)
