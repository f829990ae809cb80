"""Utility modules for pwappy-e2e."""

from pwappy_e2e.utils.logging import setup_logging
from pwappy_e2e.utils.text import contains_normalized, normalize_whitespace
from pwappy_e2e.utils.waits import is_visible_within

__all__ = ["contains_normalized", "is_visible_within", "normalize_whitespace", "setup_logging"]
