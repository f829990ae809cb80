"""Retry helper for best-effort cleanup operations.

Test helpers never retry: a failed wait fails the test. Cleanup is the
exception, where a transient Playwright timeout should not leave an
application behind.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

logger = logging.getLogger(__name__)

RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    TimeoutError,
    asyncio.TimeoutError,
    PlaywrightTimeoutError,
)

DEFAULT_MAX_ATTEMPTS: int = 3
DEFAULT_BACKOFF_BASE: float = 1.0


def is_retryable(exception: Exception) -> bool:
    """Check if an exception is retryable.

    Args:
        exception: The exception to check.

    Returns:
        True for timeouts, including Playwright errors whose message reports one.
    """
    if isinstance(exception, RETRYABLE_EXCEPTIONS):
        return True

    if isinstance(exception, PlaywrightError):
        msg = str(exception).lower()
        if "timeout" in msg or "timed out" in msg:
            logger.debug("Retryable Playwright timeout error: %s", msg)
            return True
    return False



async def with_retry[T](
    func: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    backoff_base: float = DEFAULT_BACKOFF_BASE,
    description: str = "operation",
) -> T:
    """Run a cleanup step, retrying timeouts with exponential backoff.

    The n-th retry waits backoff_base * 2^(n-1) seconds.

    Args:
        func: Async function to execute (typically a lambda wrapping the call).
        max_attempts: Maximum number of attempts (default: 3).
        backoff_base: Base delay in seconds (default: 1.0).
        description: What is being attempted, for log messages (e.g., "delete test-key-...").

    Returns:
        The result of the function call.

    Raises:
        The last timeout once attempts run out, or the first non-timeout error.
    """
    attempt = 1
    while True:
        try:
            return await func()
        except Exception as e:
            if not is_retryable(e):
                raise
            if attempt >= max_attempts:
                logger.error(
                    "%s: attempt %d/%d failed: %s: %s. No more retries.",
                    description,
                    attempt,
                    max_attempts,
                    type(e).__name__,
                    e,
                )
                raise

            delay = backoff_base * 2 ** (attempt - 1)
            logger.warning(
                "%s: attempt %d/%d failed: %s: %s. Retrying in %.1fs...",
                description,
                attempt,
                max_attempts,
                type(e).__name__,
                e,
                delay,
            )
            await asyncio.sleep(delay)
            attempt += 1
