"""Whitespace-insensitive text comparison for generated scripts."""

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse every run of whitespace to one space and trim the ends.

    Makes comparisons indifferent to indentation and line breaks while
    keeping token order and adjacency.

    Args:
        text: Source text

    Returns:
        Normalized text
    """
    return _WHITESPACE_RUN.sub(" ", text).strip()


def contains_normalized(haystack: str, needle: str) -> bool:
    """Check substring containment after normalizing both sides.

    Args:
        haystack: Actual text (e.g., concatenated script contents)
        needle: Expected fragment

    Returns:
        True if normalize(needle) is a substring of normalize(haystack)
    """
    return normalize_whitespace(needle) in normalize_whitespace(haystack)
