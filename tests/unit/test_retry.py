"""Unit tests for the cleanup retry helper."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pwappy_e2e.models import ScriptSaveError
from pwappy_e2e.retry import is_retryable, with_retry


class TestIsRetryable:
    """Tests for is_retryable function."""

    def test_builtin_timeout(self) -> None:
        """Test that TimeoutError is retryable."""
        assert is_retryable(TimeoutError("timeout"))

    def test_playwright_timeout_error(self) -> None:
        """Test that Playwright's TimeoutError is retryable."""
        assert is_retryable(PlaywrightTimeoutError("Timeout 30000ms exceeded."))

    def test_playwright_error_mentioning_timeout(self) -> None:
        """Test that a generic Playwright error reporting a timeout is retryable."""
        assert is_retryable(PlaywrightError("Navigation timed out"))

    def test_other_playwright_error(self) -> None:
        """Test that other Playwright errors are not retried."""
        assert not is_retryable(PlaywrightError("Target page, context or browser has been closed"))

    def test_assertion_and_helper_errors(self) -> None:
        """Test that assertion failures and helper errors are not retried."""
        assert not is_retryable(AssertionError("Locator expected to be visible"))
        assert not is_retryable(ScriptSaveError("save failed"))


class TestWithRetry:
    """Tests for with_retry function."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self) -> None:
        """Test that a successful call is not repeated."""
        func = AsyncMock(return_value="deleted")

        assert await with_retry(func) == "deleted"
        assert func.call_count == 1

    @pytest.mark.asyncio
    async def test_retries_timeouts_with_backoff(self) -> None:
        """Test exponential backoff between timed-out attempts."""
        func = AsyncMock(side_effect=[PlaywrightTimeoutError("Timeout"), TimeoutError(), None])
        sleep_mock = AsyncMock()

        with patch("pwappy_e2e.retry.asyncio.sleep", sleep_mock):
            await with_retry(func, backoff_base=0.5)

        assert func.call_count == 3
        assert [c.args[0] for c in sleep_mock.call_args_list] == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_non_retryable_raises_immediately(self) -> None:
        """Test that non-timeout errors propagate on the first attempt."""
        func = AsyncMock(side_effect=AssertionError("row still visible"))

        with pytest.raises(AssertionError, match="row still visible"):
            await with_retry(func)

        assert func.call_count == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that the last timeout is raised and logged."""
        func = AsyncMock(side_effect=TimeoutError("timeout"))

        with (
            patch("pwappy_e2e.retry.asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(TimeoutError, match="timeout"),
        ):
            await with_retry(func, max_attempts=2)

        assert func.call_count == 2
        assert "attempt 1/2 failed" in caplog.text
        assert "No more retries" in caplog.text
