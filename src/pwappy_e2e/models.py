"""Pydantic data models for pwappy-e2e.

This module defines the data models shared by the helpers and the test
suite, including application identity, auth cookies, and error types.
"""

from __future__ import annotations

import time
from enum import Enum

from pydantic import BaseModel

from pwappy_e2e.constants import (
    APP_IDENTIFIER_MAX_LENGTH,
    AUTH_COOKIE_NAME,
    IDENT_KEY_COOKIE_NAME,
    LOGIN_COOKIE_NAME,
)


class AppIdentity(BaseModel):
    """A dashboard application created for one test.

    Attributes:
        name: Application name shown in the dashboard list
        key: Application key (unique, used for deletion)
    """

    name: str
    key: str


class AuthCookies(BaseModel):
    """Session cookies that authenticate the browsing context.

    Attributes:
        auth_token: Value of the pwappy_auth cookie
        ident_key: Value of the pwappy_ident_key cookie
    """

    auth_token: str
    ident_key: str

    def as_dict(self) -> dict[str, str]:
        """Return the cookies as a name/value mapping.

        Returns:
            Mapping including the constant login flag cookie
        """
        return {
            AUTH_COOKIE_NAME: self.auth_token,
            IDENT_KEY_COOKIE_NAME: self.ident_key,
            LOGIN_COOKIE_NAME: "1",
        }


class BrowserName(str, Enum):
    """Browser engines the suite can run on."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class ScriptType(str, Enum):
    """Kind of global script created from the script tab."""

    FUNCTION = "function"
    CLASS = "class"


class DashboardTab(str, Enum):
    """Top-level dashboard tabs (element ids)."""

    WORKBENCH = "workbench"
    PUBLISH = "publish"
    ARCHIVE = "archive"


class MovingHandle(str, Enum):
    """Side panels toggled by the moving handles on mobile viewports."""

    LEFT = "left"
    RIGHT = "right"


class AttributeScope(str, Enum):
    """Where an attribute definition added in the property panel applies."""

    ELEMENT = "element"
    TAG = "tag"


class EditorInputMethod(str, Enum):
    """How set_editor_content ended up writing the editor text."""

    MODEL_API = "model_api"
    FILL = "fill"
    KEYSTROKES = "keystrokes"


class EditorInputResult(BaseModel):
    """Outcome of writing text into the Monaco editor.

    Attributes:
        method: Input strategy that produced the final text
        actual: Editor text read back after the write ("" when unknown)
    """

    method: EditorInputMethod
    actual: str = ""


class SweepResult(BaseModel):
    """Result of sweeping leftover test applications.

    Attributes:
        deleted: Names of deleted applications
        failed: Mapping of application name to error message
    """

    deleted: list[str] = []
    failed: dict[str, str] = {}


def _reversed_timestamp() -> str:
    return str(int(time.time() * 1000))[::-1]


def generate_app_identity(
    run_suffix: str,
    name_prefix: str = "test-app",
    key_prefix: str = "test-key",
) -> AppIdentity:
    """Generate a unique application name/key pair.

    The millisecond timestamp is reversed so that the fastest-changing
    digits survive truncation to the dashboard's identifier limit.

    Args:
        run_suffix: Identifies the CI run or "local"
        name_prefix: Prefix of the application name
        key_prefix: Prefix of the application key

    Returns:
        AppIdentity with both values truncated to 30 characters
    """
    unique_id = f"{run_suffix}-{_reversed_timestamp()}"
    return AppIdentity(
        name=f"{name_prefix}-{unique_id}"[:APP_IDENTIFIER_MAX_LENGTH],
        key=f"{key_prefix}-{unique_id}"[:APP_IDENTIFIER_MAX_LENGTH],
    )


class ErrorCode(str, Enum):
    """Error codes for pwappy-e2e helper errors."""

    MISSING_CONFIGURATION = "missing_configuration"
    INVALID_CONFIGURATION = "invalid_configuration"
    ARTIFACT_NOT_FOUND = "artifact_not_found"
    SCRIPT_SAVE_FAILED = "script_save_failed"
    NODE_ID_MISSING = "node_id_missing"
    ELEMENT_NOT_RENDERED = "element_not_rendered"


class PwappyE2EError(Exception):
    """Base exception for helper-level failures.

    Attributes:
        code: Error code
        message: Human-readable error message
        details: Additional error details
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            details: Additional context (e.g., URL, selector)
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(PwappyE2EError):
    """Required environment configuration is missing or invalid."""

    def __init__(self, message: str, details: dict[str, object] | None = None, *, invalid: bool = False) -> None:
        code = ErrorCode.INVALID_CONFIGURATION if invalid else ErrorCode.MISSING_CONFIGURATION
        super().__init__(code, message, details)


class ArtifactNotFoundError(PwappyE2EError):
    """The generated main.js of a test page could not be located or fetched."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(ErrorCode.ARTIFACT_NOT_FOUND, message, details)


class ScriptSaveError(PwappyE2EError):
    """The editor reported an error while saving a script."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(ErrorCode.SCRIPT_SAVE_FAILED, message, details)


class NodeIdMissingError(PwappyE2EError):
    """A DOM-tree node has no data-node-id attribute."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(ErrorCode.NODE_ID_MISSING, message, details)


class ElementNotRenderedError(PwappyE2EError):
    """An element has no bounding box, so it cannot be dragged or dropped onto."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(ErrorCode.ELEMENT_NOT_RENDERED, message, details)
