"""Domain exceptions: all public errors of problemreport.

All exceptions visible to users are defined here.
Application and presentation layers raise these, not their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ProblemReportError(Exception):
    """Base for all problemreport error exceptions.

    Allows: except ProblemReportError to catch all library errors.
    """


class BacktraceMatchError(ProblemReportError, LookupError):
    """No backtrace frame references the example's top-level file.

    Raised only when the missing-line policy is ERROR.
    Inherits LookupError for semantic correctness (lookup found nothing).

    Attributes:
        file_path: Resolved top-level group file that was searched for.
        backtrace: Frames that were scanned, innermost first.
    """

    def __init__(self, *, file_path: str, backtrace: Sequence[str]) -> None:
        """Initialize with searched path and scanned frames."""
        self.file_path = file_path
        self.backtrace = tuple(backtrace)
        super().__init__(
            f"No backtrace frame references '{file_path}' ({len(self.backtrace)} frames scanned)"
        )


class InvalidOptionError(ProblemReportError, ValueError):
    """Configuration option has an unsupported value.

    Attributes:
        option: Option name as the user spells it.
        value: Rejected value.
        allowed: Accepted values.
    """

    def __init__(self, *, option: str, value: str, allowed: Sequence[str]) -> None:
        """Initialize with option name, bad value and accepted values."""
        self.option = option
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid value {value!r} for {option}, expected one of: {', '.join(self.allowed)}"
        )


class NotificationOrderError(ProblemReportError, RuntimeError):
    """Notification received before the ones it depends on.

    Hosts must call start, stop, summary in that order.

    Attributes:
        missing: Name of the notification not yet received.
    """

    def __init__(self, missing: str) -> None:
        """Initialize with the missing notification name."""
        self.missing = missing
        super().__init__(f"summary received before {missing}")


class UnsupportedColorModeWarning(UserWarning):
    """Host exposes no recognized color setting.

    The report is still produced, without suppressing host colorization.
    """
