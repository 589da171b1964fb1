"""Scoped host color suppression."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from problemreport.domain.ports.color_mode import ColorModeSetting


@contextmanager
def suppressed_color(setting: ColorModeSetting | None) -> Iterator[None]:
    """Force host colorization off for the duration of the block.

    The exact prior value is restored on every exit path.
    None means the host has no recognized setting: nothing is touched.

    Args:
        setting: Host color capability, or None
    """
    if setting is None:
        yield
        return

    previous = setting.enabled
    setting.enabled = False
    try:
        yield
    finally:
        setting.enabled = previous
