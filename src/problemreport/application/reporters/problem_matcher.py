"""Problem matcher formatter: test run → line-oriented text report.

The report is parsed by editor problem matchers, so every line starts with
a stable key and each failure fits on exactly one line:

    TestEnvNumber: rspec3
    TestCount: 12
    PendingCount: 1
    FailureCount: 1
    TestDuration: 0.731250
    TestStarted: 2024-05-01T10:22:03+02:00
    HostName: build-07
    TestSeed: 4021
    Pending: TestFile:tests/test_cart.py
    TestFailure: TestFile:tests/test_cart.py Line:42 Message:expected 1| got 2
"""

from __future__ import annotations

import logging
import os
import socket
import sys
from datetime import datetime
from typing import TYPE_CHECKING

from problemreport.application.reporters.backtrace import find_failure_line
from problemreport.application.reporters.color import suppressed_color
from problemreport.application.reporters.messages import flatten_failure_message
from problemreport.domain.exceptions import BacktraceMatchError, NotificationOrderError
from problemreport.domain.model.configuration import FormatterConfig, RenderOptions
from problemreport.domain.model.enums import ExampleStatus, MissingLinePolicy

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from problemreport.domain.model.example import ExampleResult, Failure
    from problemreport.domain.model.notifications import (
        ExamplesNotification,
        RunStartNotification,
        SummaryNotification,
    )
    from problemreport.domain.ports.color_mode import ColorModeSetting
    from problemreport.domain.ports.output import OutputSink

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ProblemMatcherFormatter:
    """Formatter receiving start, stop and summary notifications.

    Notifications arrive once each, in that order. Only summary writes:
    the whole report is rendered at once, with host colorization forced off.

    Host-independent: process environment, hostname and clock are injectable.
    """

    def __init__(
        self,
        output: OutputSink | None = None,
        *,
        config: FormatterConfig | None = None,
        color_mode: ColorModeSetting | None = None,
        environ: Mapping[str, str] | None = None,
        hostname: Callable[[], str] = socket.gethostname,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        """Initialize formatter.

        Args:
            output: Report destination (default: sys.stdout)
            config: Formatter configuration (default: FormatterConfig())
            color_mode: Host color setting to suppress while rendering.
                None = host has no recognized setting.
            environ: Environment to read the shard index from (default: os.environ)
            hostname: Returns the local machine name
            clock: Returns the current local time, timezone-aware
        """
        self._output = output if output is not None else sys.stdout
        self._config = config or FormatterConfig()
        self._color_mode = color_mode
        self._environ = environ if environ is not None else os.environ
        self._hostname = hostname
        self._clock = clock

        self._started: datetime | None = None
        self._start_notification: RunStartNotification | None = None
        self._examples_notification: ExamplesNotification | None = None
        self._summary_notification: SummaryNotification | None = None

    # Notifications

    def start(self, notification: RunStartNotification) -> None:
        """Record run start. Wall-clock time is taken from our own clock."""
        self._start_notification = notification
        self._started = self._clock()
        logger.debug("Run started at %s", self._started.isoformat())

    def stop(self, notification: ExamplesNotification) -> None:
        """Keep example results for the summary. No output."""
        self._examples_notification = notification
        logger.debug("Run stopped with %d examples", len(notification.results))

    def summary(self, notification: SummaryNotification) -> None:
        """Render the full report with host colorization off.

        Raises:
            NotificationOrderError: start or stop was not received
            BacktraceMatchError: failure line not found and policy is ERROR
        """
        self._summary_notification = notification
        with suppressed_color(self._color_mode):
            self.render(RenderOptions(colorize=False))

    # Rendering

    def render(self, options: RenderOptions) -> None:
        """Write the report for the notifications received so far.

        Args:
            options: Per-render options
        """
        if self._started is None:
            raise NotificationOrderError("start")
        if self._examples_notification is None:
            raise NotificationOrderError("stop")
        summary = self._summary_notification
        if summary is None:
            raise NotificationOrderError("summary")

        self._render_header(summary, self._started)
        for example in self._examples_notification.results:
            self._render_example(example, options)

    def _write(self, text: str) -> None:
        """Write one report line."""
        self._output.write(f"{text}\n")

    def _render_header(self, summary: SummaryNotification, started: datetime) -> None:
        """Write the fixed header lines."""
        env_number = self._environ.get(self._config.env_var, "")
        seed = "" if summary.seed is None else str(summary.seed)

        self._write(f"TestEnvNumber: {self._config.env_prefix}{env_number}")
        self._write(f"TestCount: {summary.example_count}")
        self._write(f"PendingCount: {summary.pending_count}")
        self._write(f"FailureCount: {summary.failure_count}")
        self._write(f"TestDuration: {summary.duration:.6f}")
        self._write(f"TestStarted: {started.isoformat(timespec='seconds')}")
        self._write(f"HostName: {self._hostname()}")
        self._write(f"TestSeed: {seed}")

    def _render_example(self, example: ExampleResult, options: RenderOptions) -> None:
        """Write the line for one example. Passed examples write nothing."""
        match example.status:
            case ExampleStatus.PENDING:
                self._write(f"Pending: TestFile:{example.top_level_file_path}")
            case ExampleStatus.FAILED:
                self._render_failure(example, options)
            case ExampleStatus.PASSED:
                pass

    def _render_failure(self, example: ExampleResult, options: RenderOptions) -> None:
        """Write a TestFailure line."""
        failure = example.failure
        if failure is None:
            raise TypeError(f"failed example {example.description!r} has no failure")

        file_path = example.top_level_file_path
        line = self._failure_line(example, failure, file_path)
        message = flatten_failure_message(
            failure.message,
            strip_colors=not options.colorize,
        )
        self._write(f"TestFailure: TestFile:{file_path} Line:{line} Message:{message}")

    def _failure_line(self, example: ExampleResult, failure: Failure, file_path: str) -> str:
        """Line field for a failure, applying the missing-line policy."""
        backtrace = failure.backtrace
        line = find_failure_line(backtrace, file_path)
        if line is not None:
            return str(line)

        policy = self._config.missing_line
        if policy is MissingLinePolicy.ERROR:
            raise BacktraceMatchError(file_path=file_path, backtrace=backtrace)

        if policy is MissingLinePolicy.EMPTY:
            fallback = ""
        elif policy is MissingLinePolicy.ZERO:
            fallback = "0"
        else:
            fallback = str(example.line or 0)

        logger.warning(
            "No backtrace frame references %s for %r, reporting Line:%s (%s policy)",
            file_path,
            example.description,
            fallback,
            policy.value,
        )
        return fallback
