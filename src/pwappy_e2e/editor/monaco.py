"""Monaco code editor input helpers.

The script editor is a Monaco instance. How text can be inserted depends
on the browser engine: the model API is used when window.monaco is
exposed, otherwise the hidden textarea is filled (Chromium, WebKit) or
typed into key by key (Firefox and others). set_editor_content hides
that branch behind a single call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError

from pwappy_e2e.constants import (
    MONACO_TEXTAREA,
    MONACO_TYPING_DELAY_MS,
    MONACO_URI_ATTRIBUTE,
    MONACO_VIEW_LINES,
)
from pwappy_e2e.models import BrowserName, EditorInputMethod, EditorInputResult

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)

# Engines where Locator.fill() reaches Monaco's textarea reliably
FILL_CAPABLE_BROWSERS = frozenset({BrowserName.CHROMIUM.value, BrowserName.WEBKIT.value})

_SET_MODEL_VALUE_JS = """
({ uri, value }) => {
    const monaco = window.monaco;
    if (!monaco || !monaco.editor) return { success: false, actual: '' };
    const models = monaco.editor.getModels();
    let model;
    if (uri) {
        model = models.find((m) => m.uri.toString() === uri);
    }
    if (!model && models.length > 0) {
        model = models[0];
    }
    if (!model) return { success: false, actual: '' };
    model.setValue(value);
    return { success: true, actual: model.getValue() };
}
"""

_GET_MODEL_VALUE_JS = """
(uri) => {
    const monaco = window.monaco;
    if (!monaco || !monaco.editor) return null;
    const models = monaco.editor.getModels();
    if (uri) {
        const model = models.find((m) => m.uri.toString() === uri);
        if (model) return model.getValue();
    }
    return models.length > 0 ? models[0].getValue() : null;
}
"""


def get_browser_name(page: Page) -> str | None:
    """Return the engine name of the browser driving page, if known."""
    browser = page.context.browser
    if browser is None:
        return None
    return browser.browser_type.name


def _matches(actual: str, expected: str) -> bool:
    return actual.strip() == expected.strip()


async def _set_model_value(page: Page, editor: Locator, content: str) -> tuple[bool, str]:
    try:
        uri = await editor.get_attribute(MONACO_URI_ATTRIBUTE)
        result = await page.evaluate(_SET_MODEL_VALUE_JS, {"uri": uri, "value": content})
    except PlaywrightError as e:
        logger.debug("Monaco model API unavailable: %s", e)
        return False, ""
    return bool(result.get("success")), str(result.get("actual") or "")


async def _clear_textarea(page: Page, editor: Locator, browser_name: str | None) -> Locator:
    textarea = editor.locator(MONACO_TEXTAREA)
    if browser_name != BrowserName.WEBKIT.value:
        await editor.locator(MONACO_VIEW_LINES).click()
    await textarea.focus()
    # Close any open suggestion widget before selecting
    await page.keyboard.press("Escape")
    if browser_name == BrowserName.WEBKIT.value:
        await textarea.press("Meta+a")
        await textarea.press("Backspace")
    else:
        await textarea.press("Control+a")
        await textarea.press("Delete")
    return textarea


async def get_editor_content(page: Page, editor: Locator) -> str:
    """Read the full text of a Monaco editor.

    Prefers the editor model (complete text); falls back to the rendered
    lines, which may miss virtualized off-screen lines, then to the
    textarea value.

    Args:
        page: Page hosting the editor
        editor: Locator of the .monaco-editor element

    Returns:
        Current editor text
    """
    uri = await editor.get_attribute(MONACO_URI_ATTRIBUTE)
    content = await page.evaluate(_GET_MODEL_VALUE_JS, uri)
    if content is not None:
        return str(content)

    view_lines = editor.locator(MONACO_VIEW_LINES)
    if await view_lines.is_visible():
        return await view_lines.inner_text()

    return await editor.locator(MONACO_TEXTAREA).input_value()


async def set_editor_content(page: Page, editor: Locator, content: str) -> EditorInputResult:
    """Replace the whole text of a Monaco editor with content.

    Strategy order:
        1. model.setValue() through window.monaco (no auto-completion interference)
        2. select-all + delete on the textarea, then fill() where the engine supports it
        3. otherwise key-by-key typing, trimming auto-inserted trailing text

    Args:
        page: Page hosting the editor
        editor: Locator of the .monaco-editor element
        content: Full text the editor must contain afterwards

    Returns:
        EditorInputResult with the strategy used and the text read back
    """
    success, actual = await _set_model_value(page, editor, content)
    if success and _matches(actual, content):
        logger.debug("Editor content set via model API (%d chars)", len(content))
        return EditorInputResult(method=EditorInputMethod.MODEL_API, actual=actual)

    browser_name = get_browser_name(page)
    if success:
        logger.warning(
            "Model API mismatch on %s. Expected starting with: %r, actual starting with: %r",
            browser_name,
            content[:50],
            actual[:50],
        )

    textarea = await _clear_textarea(page, editor, browser_name)

    if browser_name in FILL_CAPABLE_BROWSERS:
        await textarea.fill(content)
        method = EditorInputMethod.FILL
    else:
        if browser_name != BrowserName.FIREFOX.value:
            logger.warning("Unsupported browser for optimized fill: %s. Falling back to typing.", browser_name)
        await textarea.press_sequentially(content, delay=MONACO_TYPING_DELAY_MS)
        # Auto-closed brackets end up after the cursor; drop them
        await textarea.press("Shift+Control+End")
        await textarea.press("Delete")
        method = EditorInputMethod.KEYSTROKES

    final = await get_editor_content(page, editor)
    if not _matches(final, content):
        logger.warning("Editor content differs after %s input. Actual: %r", method.value, final[:200])
    return EditorInputResult(method=method, actual=final)
