"""Hook implementations driving the formatter during a pytest session.

Notification order:
    pytest_sessionstart     → start
    pytest_sessionfinish    → stop
    pytest_terminal_summary → summary (or right after stop without terminal
                              or with --no-summary)
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

import pytest

from problemreport.domain.model.notifications import ExamplesNotification, RunStartNotification
from problemreport.presentation.pytest_plugin.adapters import (
    ExampleCollector,
    build_summary,
    failure_from_excinfo,
    resolve_seed,
)

if TYPE_CHECKING:
    from collections.abc import Generator

    from problemreport.application.reporters.problem_matcher import ProblemMatcherFormatter
    from problemreport.domain.model.example import Failure

logger = logging.getLogger(__name__)


class ProblemMatcherPlugin:
    """Session-scoped plugin object, registered when the report is enabled.

    Collects per-test results and forwards lifecycle notifications to
    ProblemMatcherFormatter.
    """

    def __init__(
        self,
        config: pytest.Config,
        formatter: ProblemMatcherFormatter,
        *,
        has_terminal: bool,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize plugin.

        Args:
            config: pytest Config object
            formatter: Formatter receiving notifications
            has_terminal: Terminal reporter is active and will call
                pytest_terminal_summary
            stream: Report file owned by the plugin, closed by close()
        """
        self._config = config
        self._formatter = formatter
        self._has_terminal = has_terminal
        self._stream = stream
        self._collector = ExampleCollector(
            rootpath=config.rootpath,
            invocation_path=config.invocation_params.dir,
        )
        self._failures: dict[tuple[str, str], Failure] = {}
        self._session_start: float | None = None
        self._stopped = False
        self._summarized = False

    def close(self) -> None:
        """Close the report file, if any."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def pytest_sessionstart(self) -> None:
        self._session_start = time.perf_counter()
        self._formatter.start(RunStartNotification(started_at=datetime.now(UTC)))

    @pytest.hookimpl(wrapper=True)
    def pytest_runtest_makereport(
        self,
        call: pytest.CallInfo[None],
    ) -> Generator[None, pytest.TestReport, pytest.TestReport]:
        """Capture live exception info of failing phases."""
        report = yield
        if report.failed and call.excinfo is not None:
            self._failures[(report.nodeid, report.when)] = failure_from_excinfo(call.excinfo)
        return report

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        failure = self._failures.pop((report.nodeid, report.when), None)
        self._collector.add(report, failure)

    @pytest.hookimpl(trylast=True)
    def pytest_sessionfinish(self) -> None:
        self._formatter.stop(ExamplesNotification(results=self._collector.results()))
        self._stopped = True
        # --no-summary skips pytest_terminal_summary
        if not self._has_terminal or self._config.getoption("no_summary", default=False):
            self._summarize()

    def pytest_terminal_summary(self) -> None:
        if self._stopped:
            self._summarize()

    def _summarize(self) -> None:
        """Send the summary notification once."""
        if self._summarized:
            return
        self._summarized = True

        results = self._collector.results()
        started = self._session_start if self._session_start is not None else time.perf_counter()
        duration = max(time.perf_counter() - started, 0.0)
        summary = build_summary(results, duration, resolve_seed(self._config))
        logger.debug(
            "Summary: %d examples, %d pending, %d failed",
            summary.example_count,
            summary.pending_count,
            summary.failure_count,
        )
        self._formatter.summary(summary)
        if self._stream is not None:
            self._stream.flush()
