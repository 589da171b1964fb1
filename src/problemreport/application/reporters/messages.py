"""Failure message cleanup: diff color stripping and line flattening."""

from __future__ import annotations

import re

# Diff hunks are appended to failure messages with ANSI color codes when the
# host colorizes, regardless of what the reporter asks for. Only the diff block
# is stripped: the message itself may legitimately contain escape codes.
DIFF_BLOCK_PATTERN = re.compile(
    r"^(?P<indent>[ ]*)Diff:(?:\x1b\[0m)?(?:\n(?P=indent)\x1b\[\d+m.*)*",
    re.MULTILINE,
)
COLOR_CODE_PATTERN = re.compile(r"\x1b\[\d+m")
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

LINE_SEPARATOR = "|"


def strip_diff_colors(text: str) -> str:
    """Remove color codes from the first Diff: block of a message.

    Args:
        text: Exception message, possibly with an embedded diff

    Returns:
        Message with the diff block uncolored, everything else verbatim
    """
    return DIFF_BLOCK_PATTERN.sub(
        lambda match: COLOR_CODE_PATTERN.sub("", match.group(0)),
        text,
        count=1,
    )


def flatten_failure_message(text: str, *, strip_colors: bool = True) -> str:
    """Make a failure message fit on one report line.

    Trailing line breaks are dropped, inner ones become `|`.

    Args:
        text: Exception message
        strip_colors: Uncolor the Diff: block first

    Returns:
        Single-line message
    """
    if strip_colors:
        text = strip_diff_colors(text)
    cleaned = text.rstrip("\r\n")
    return LINE_SEPARATOR.join(LINE_BREAK_PATTERN.split(cleaned))
