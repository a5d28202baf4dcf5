"""Path and filename utilities.

Suggested export filenames embed artist, tour and city names, which can
contain characters that are not valid in a filename on every platform.
"""

from __future__ import annotations

import re

# Path separators plus characters reserved on Windows
_RESERVED_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')
_WHITESPACE = re.compile(r"\s+")


def sanitize_filename(name: str, fallback: str = "Export") -> str:
    """Make a display string safe to use as a single filename.

    Reserved characters become "-", whitespace runs collapse to one space
    and leading/trailing dots and spaces are stripped.

    Args:
        name: Proposed filename (with or without extension).
        fallback: Returned when nothing usable remains.

    Returns:
        Sanitized filename.

    Examples:
        >>> sanitize_filename("AC/DC - Power Up: Live.pdf")
        'AC-DC - Power Up- Live.pdf'
        >>> sanitize_filename("  ..  ")
        'Export'
    """
    # Tabs and newlines are control characters; collapse them before replacing
    cleaned = _WHITESPACE.sub(" ", name)
    cleaned = _RESERVED_CHARS.sub("-", cleaned).strip(" .")
    return cleaned or fallback
