"""Browser module for pwappy-e2e.

Provides Playwright browser lifecycle and cookie-based authentication.
"""

from pwappy_e2e.browser.session import inject_auth_cookies, launch_browser_context

__all__ = ["inject_auth_cookies", "launch_browser_context"]
