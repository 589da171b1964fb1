"""Output port: where the report text goes."""

from __future__ import annotations

from typing import Protocol


class OutputSink(Protocol):
    """Anything accepting text: a TextIO, or a terminal reporter adapter."""

    def write(self, text: str, /) -> object:
        """Write text as-is, newlines included."""
        ...
