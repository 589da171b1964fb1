"""Color mode port: host's global colorization setting."""

from __future__ import annotations

from typing import Protocol


class ColorModeSetting(Protocol):
    """Contract for a host color/highlight toggle.

    The host integration resolves one implementation at configure time.
    The formatter only reads and writes `enabled`.

    Example:
        class TerminalColorMode:
            def __init__(self, writer: TerminalWriter) -> None:
                self._writer = writer

            @property
            def enabled(self) -> bool:
                return self._writer.hasmarkup

            @enabled.setter
            def enabled(self, value: bool) -> None:
                self._writer.hasmarkup = value
    """

    @property
    def enabled(self) -> bool:
        """Whether the host currently colorizes output."""
        ...

    @enabled.setter
    def enabled(self, value: bool) -> None: ...
