"""E2E tests for the Pwappy editor's event and script features.

Tests in this package require:
- A reachable dashboard (PWAPPY_TEST_BASE_URL)
- Valid session cookies (PWAPPY_TEST_AUTH, PWAPPY_TEST_IDENT_KEY)
- Playwright browsers installed (`playwright install`)

Usage:
    pytest tests/e2e/ -v --tb=short

Note:
    Tests are marked with @pytest.mark.e2e and @pytest.mark.requires_auth.
    They are skipped when the environment is not configured.
"""
