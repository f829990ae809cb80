"""Unit tests for Monaco editor input strategies."""

from __future__ import annotations

import pytest

from pwappy_e2e.editor.monaco import get_browser_name, get_editor_content, set_editor_content
from pwappy_e2e.models import EditorInputMethod
from tests.conftest import LocatorMock, make_page

SCRIPT = "function testLoadScript(event) {\nons.notification.alert('loadScript');"


def _editor() -> LocatorMock:
    editor = LocatorMock()
    editor.get_attribute.return_value = "inmemory://model/1"
    return editor


class TestGetBrowserName:
    """Tests for get_browser_name function."""

    def test_reads_browser_type(self) -> None:
        """Test that the engine name comes from the context's browser."""
        assert get_browser_name(make_page("webkit")) == "webkit"

    def test_no_browser(self) -> None:
        """Test that a persistent context without browser yields None."""
        assert get_browser_name(make_page(None)) is None


class TestSetEditorContent:
    """Tests for set_editor_content function."""

    @pytest.mark.asyncio
    async def test_model_api_first(self) -> None:
        """Test that the model API is used when it reads back the same text."""
        page = make_page("chromium")
        editor = _editor()
        page.evaluate.return_value = {"success": True, "actual": SCRIPT}

        result = await set_editor_content(page, editor, SCRIPT)

        assert result.method == EditorInputMethod.MODEL_API
        assert result.actual == SCRIPT
        assert page.evaluate.await_args.args[1] == {"uri": "inmemory://model/1", "value": SCRIPT}
        editor.locator.assert_not_called()

    @pytest.mark.asyncio
    async def test_fill_fallback_on_chromium(self) -> None:
        """Test that Chromium clears the textarea with Control and fills it."""
        page = make_page("chromium")
        editor = _editor()
        # setValue unavailable, then the read-back returns the filled text
        page.evaluate.side_effect = [{"success": False, "actual": ""}, SCRIPT]
        textarea = editor.locator.return_value

        result = await set_editor_content(page, editor, SCRIPT)

        assert result.method == EditorInputMethod.FILL
        assert result.actual == SCRIPT
        assert [c.args[0] for c in textarea.press.await_args_list] == ["Control+a", "Delete"]
        textarea.fill.assert_awaited_once_with(SCRIPT)
        textarea.press_sequentially.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_webkit_mismatch_uses_meta_and_fill(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a WebKit read-back mismatch falls back with Meta+a."""
        page = make_page("webkit")
        editor = _editor()
        page.evaluate.side_effect = [{"success": True, "actual": SCRIPT + "}"}, SCRIPT]
        textarea = editor.locator.return_value

        result = await set_editor_content(page, editor, SCRIPT)

        assert result.method == EditorInputMethod.FILL
        assert [c.args[0] for c in textarea.press.await_args_list] == ["Meta+a", "Backspace"]
        assert "Model API mismatch" in caplog.text

    @pytest.mark.asyncio
    async def test_firefox_types_keystrokes(self) -> None:
        """Test that other engines type character by character."""
        page = make_page("firefox")
        editor = _editor()
        page.evaluate.side_effect = [{"success": False, "actual": ""}, SCRIPT]
        textarea = editor.locator.return_value

        result = await set_editor_content(page, editor, SCRIPT)

        assert result.method == EditorInputMethod.KEYSTROKES
        textarea.press_sequentially.assert_awaited_once_with(SCRIPT, delay=10)
        textarea.fill.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_evaluate_error_falls_back(self) -> None:
        """Test that a Playwright error from the model API is not fatal."""
        from playwright.async_api import Error as PlaywrightError

        page = make_page("chromium")
        editor = _editor()
        page.evaluate.side_effect = [PlaywrightError("monaco is not defined"), SCRIPT]

        result = await set_editor_content(page, editor, SCRIPT)

        assert result.method == EditorInputMethod.FILL


class TestGetEditorContent:
    """Tests for get_editor_content function."""

    @pytest.mark.asyncio
    async def test_model_value(self) -> None:
        """Test that the model text is preferred."""
        page = make_page()
        page.evaluate.return_value = "const a = 1;"

        assert await get_editor_content(page, _editor()) == "const a = 1;"

    @pytest.mark.asyncio
    async def test_view_lines_fallback(self) -> None:
        """Test that rendered lines are used without window.monaco."""
        page = make_page()
        page.evaluate.return_value = None
        editor = _editor()
        view_lines = editor.locator.return_value
        view_lines.is_visible.return_value = True
        view_lines.inner_text.return_value = "const a = 1;"

        assert await get_editor_content(page, editor) == "const a = 1;"
        editor.locator.assert_called_with(".view-lines")

    @pytest.mark.asyncio
    async def test_textarea_fallback(self) -> None:
        """Test that the textarea value is the last resort."""
        page = make_page()
        page.evaluate.return_value = None
        editor = _editor()
        editor.locator.return_value.is_visible.return_value = False
        editor.locator.return_value.input_value.return_value = "x"

        assert await get_editor_content(page, editor) == "x"
