"""Notification payloads handed to the formatter by the host.

The formatter never owns or mutates these, it only reads fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from problemreport.domain.model.example import ExampleResult


@dataclass(frozen=True, slots=True)
class RunStartNotification:
    """Run start context.

    Attributes:
        started_at: Host timestamp of the run start
    """

    started_at: datetime


@dataclass(frozen=True, slots=True)
class ExamplesNotification:
    """All example results of the run, in run order.

    Attributes:
        results: Example results
    """

    results: tuple[ExampleResult, ...] = ()


@dataclass(frozen=True, slots=True)
class SummaryNotification:
    """Aggregate statistics of the run.

    example_count == len(ExamplesNotification.results) is assumed, not checked.

    Attributes:
        example_count: Total examples
        pending_count: Pending examples
        failure_count: Failed examples
        duration: Total run time in seconds
        seed: Random ordering seed, None if ordering is not randomized
    """

    example_count: int
    pending_count: int
    failure_count: int
    duration: float
    seed: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.example_count < 0:
            raise ValueError(f"example_count must be >= 0, got {self.example_count}")
        if self.pending_count < 0:
            raise ValueError(f"pending_count must be >= 0, got {self.pending_count}")
        if self.failure_count < 0:
            raise ValueError(f"failure_count must be >= 0, got {self.failure_count}")
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")
