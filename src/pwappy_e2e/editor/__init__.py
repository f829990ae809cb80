"""Editor page helpers."""

from pwappy_e2e.editor.alerts import LocatorScope, verify_and_close_alert
from pwappy_e2e.editor.helper import EditorHelper
from pwappy_e2e.editor.monaco import get_editor_content, set_editor_content
from pwappy_e2e.editor.preview import verify_script_in_test_page

__all__ = [
    "EditorHelper",
    "LocatorScope",
    "get_editor_content",
    "set_editor_content",
    "verify_and_close_alert",
    "verify_script_in_test_page",
]
