"""Unit tests for preview and test-page script verification."""

from __future__ import annotations

import pytest

from pwappy_e2e.editor.preview import (
    assert_contains_normalized,
    collect_preview_scripts,
    verify_script_in_test_page,
)
from pwappy_e2e.models import ArtifactNotFoundError, ErrorCode
from tests.conftest import LocatorMock, make_page

MAIN_JS = """
function testDomContentLoadScript(event) {
    ons.notification.alert('domContentLoaded');
}
document.addEventListener('DOMContentLoaded', testDomContentLoadScript);
"""


class TestAssertContainsNormalized:
    """Tests for assert_contains_normalized function."""

    def test_passes_on_reformatted_code(self) -> None:
        """Test that whitespace layout is ignored."""
        assert_contains_normalized(MAIN_JS, "function testDomContentLoadScript(event) {\nons.notification.alert(")

    def test_failure_shows_both_strings(self) -> None:
        """Test that the assertion message includes expected and actual text."""
        with pytest.raises(AssertionError) as exc_info:
            assert_contains_normalized("const a = 1;", "const b = 2;")

        assert "const b = 2;" in str(exc_info.value)
        assert "const a = 1;" in str(exc_info.value)


class TestCollectPreviewScripts:
    """Tests for collect_preview_scripts function."""

    @pytest.mark.asyncio
    async def test_joins_scripts_with_newlines(self) -> None:
        """Test that all script texts are concatenated after the body is visible."""
        frame = LocatorMock()
        frame.locator.return_value.all_text_contents.return_value = ["const a = 1;", "const b = 2;"]

        text = await collect_preview_scripts(frame)

        assert text == "const a = 1;\nconst b = 2;"
        frame.locator.return_value.wait_for.assert_awaited_once_with(state="visible")
        assert [c.args[0] for c in frame.locator.call_args_list] == ["body", "script"]


class TestVerifyScriptInTestPage:
    """Tests for verify_script_in_test_page function."""

    @pytest.mark.asyncio
    async def test_all_fragments_present(self) -> None:
        """Test that every expected fragment is checked against main.js."""
        page = make_page()
        page.evaluate.return_value = MAIN_JS

        await verify_script_in_test_page(
            page,
            [
                "function testDomContentLoadScript(event) {",
                "ons.notification.alert('domContentLoaded')",
                "document.addEventListener('DOMContentLoaded', testDomContentLoadScript);",
            ],
        )

        page.wait_for_load_state.assert_awaited_once_with("domcontentloaded")
        assert page.evaluate.await_args.args[1] == 'script[src*="main.js"]'

    @pytest.mark.asyncio
    async def test_single_string(self) -> None:
        """Test that a single expected string is accepted."""
        page = make_page()
        page.evaluate.return_value = MAIN_JS

        await verify_script_in_test_page(page, "alert('domContentLoaded')")

    @pytest.mark.asyncio
    async def test_missing_fragment_fails(self) -> None:
        """Test that a missing fragment raises AssertionError."""
        page = make_page()
        page.evaluate.return_value = MAIN_JS

        with pytest.raises(AssertionError):
            await verify_script_in_test_page(page, ["function testDomContentLoadScript(event) {", "pushPage('page2.html')"])

    @pytest.mark.asyncio
    async def test_missing_main_js(self) -> None:
        """Test that an absent or failed main.js raises ArtifactNotFoundError."""
        page = make_page()
        page.url = "https://dashboard.pwappy.test/test/abc"
        page.evaluate.return_value = None

        with pytest.raises(ArtifactNotFoundError) as exc_info:
            await verify_script_in_test_page(page, "anything")

        assert exc_info.value.code == ErrorCode.ARTIFACT_NOT_FOUND
        assert exc_info.value.details["url"] == "https://dashboard.pwappy.test/test/abc"
