"""Failure line lookup in a formatted backtrace."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def find_failure_line(backtrace: Iterable[str], file_path: str) -> int | None:
    """Find the line of the first frame that references file_path.

    Frames are scanned in order (innermost first). The path is matched
    literally and case-insensitively, the line is the digits after `path:`.

    Args:
        backtrace: Formatted frames like "/a/b/test_x.py:42:in 'test_y'"
        file_path: Top-level group file to look for

    Returns:
        Line number, or None if no frame references the file
    """
    escaped = re.escape(file_path)
    pattern = re.compile(rf"{escaped}:(\d+)", re.IGNORECASE)

    for frame in backtrace:
        match = pattern.search(frame)
        if match is not None:
            return int(match.group(1))
    return None
