"""pytest → domain adapters.

Translate pytest reports, exception info, terminal writer and seed
options into the host-independent objects the formatter reads.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from problemreport.domain.model.enums import ExampleStatus
from problemreport.domain.model.example import ExampleGroup, ExampleResult, Failure
from problemreport.domain.model.notifications import SummaryNotification

if TYPE_CHECKING:
    from pathlib import Path

    import pytest
    from _pytest._io import TerminalWriter
    from _pytest.terminal import TerminalReporter

# Option dests of plugins that randomize test order
SEED_OPTIONS = ("randomly_seed", "random_order_seed")

NODE_ID_SEPARATOR = "::"


# =============================================================================
# Example groups
# =============================================================================


def build_group(nodeid: str, file_path: str) -> ExampleGroup:
    """Build the group chain enclosing a test from its node id.

    "tests/test_cart.py::TestCart::TestEmpty::test_total" gives
    TestEmpty → TestCart → tests/test_cart.py (root).

    Args:
        nodeid: pytest node id
        file_path: Module the test was collected from, which differs from
            the defining file for tests inherited from another module

    Returns:
        Innermost group of the test
    """
    module_id, *names = nodeid.split(NODE_ID_SEPARATOR)
    group = ExampleGroup(description=module_id or file_path, file_path=file_path)
    for name in names[:-1]:
        group = ExampleGroup(description=name, file_path=file_path, parent=group)
    return group


def module_path(
    nodeid: str,
    rootpath: Path | None = None,
    invocation_path: Path | None = None,
) -> str:
    """Path of the module that collected a test, from its node id.

    Node ids are relative to the rootdir. With both paths given the result
    is made relative to the invocation directory, like report locations.

    Args:
        nodeid: pytest node id
        rootpath: Session rootdir
        invocation_path: Directory pytest was invoked from

    Returns:
        Module path, empty if the node id has no module part
    """
    module_id, _, _ = nodeid.partition(NODE_ID_SEPARATOR)
    if not module_id or rootpath is None or invocation_path is None:
        return module_id
    return os.path.relpath(rootpath / module_id, invocation_path)


def describe(nodeid: str) -> str:
    """Full description: class names and test name, space separated."""
    _, *names = nodeid.split(NODE_ID_SEPARATOR)
    return " ".join(names) or nodeid


# =============================================================================
# Failures
# =============================================================================


def format_frame(path: object, line: int, name: str) -> str:
    """Format one backtrace frame as `path:line:in 'name'`."""
    return f"{path}:{line}:in '{name}'"


def failure_from_excinfo(excinfo: pytest.ExceptionInfo[BaseException]) -> Failure:
    """Build a Failure from live exception info.

    Frames are reversed to innermost first.
    """
    frames = tuple(
        format_frame(entry.path, entry.lineno + 1, entry.name)
        for entry in reversed(excinfo.traceback)
    )
    return Failure(
        message=str(excinfo.value),
        exception_type=excinfo.typename,
        backtrace=frames,
    )


def failure_from_report(report: pytest.TestReport) -> Failure:
    """Build a Failure from a report's serialized representation.

    Used for reports without live exception info (distributed workers,
    strict xpass). Less precise: the message is the crash line only.
    """
    longrepr = report.longrepr
    if longrepr is None:
        return Failure(message="", exception_type="")
    if isinstance(longrepr, str):
        return Failure(message=longrepr, exception_type="")

    reprcrash = getattr(longrepr, "reprcrash", None)
    reprtraceback = getattr(longrepr, "reprtraceback", None)
    if reprcrash is None or reprtraceback is None:
        return Failure(message=str(longrepr), exception_type="")

    frames: list[str] = []
    for entry in reversed(reprtraceback.reprentries):
        fileloc = getattr(entry, "reprfileloc", None)
        if fileloc is not None:
            frames.append(format_frame(fileloc.path, fileloc.lineno, fileloc.message))

    exception_type, _, _ = reprcrash.message.partition(":")
    return Failure(
        message=reprcrash.message,
        exception_type=exception_type.strip(),
        backtrace=tuple(frames),
    )


# =============================================================================
# Per-test aggregation
# =============================================================================


@dataclass(slots=True)
class _ExampleRecord:
    """Mutable accumulator over the setup, call and teardown reports."""

    nodeid: str
    module_path: str
    file_path: str
    line: int | None
    status: ExampleStatus = ExampleStatus.PASSED
    duration: float = 0.0
    failure: Failure | None = None

    def to_result(self) -> ExampleResult:
        return ExampleResult(
            status=self.status,
            description=describe(self.nodeid),
            group=build_group(self.nodeid, self.module_path),
            file_path=self.file_path,
            line=self.line,
            duration=self.duration,
            failure=self.failure,
        )


class ExampleCollector:
    """Aggregates phase reports into one result per test, in run order.

    A test is failed if any phase failed (the first failure is kept),
    else pending if any phase was skipped, else passed.
    """

    def __init__(
        self,
        rootpath: Path | None = None,
        invocation_path: Path | None = None,
    ) -> None:
        """Initialize collector.

        Args:
            rootpath: Session rootdir, node ids are relative to it
            invocation_path: Directory report locations are relative to
        """
        self._rootpath = rootpath
        self._invocation_path = invocation_path
        self._records: dict[str, _ExampleRecord] = {}

    def add(self, report: pytest.TestReport, failure: Failure | None = None) -> None:
        """Record one phase report.

        Args:
            report: setup, call or teardown report
            failure: Failure captured from live exception info, if any
        """
        record = self._records.get(report.nodeid)
        if record is None:
            file_path, lineno, _ = report.location
            collected_from = module_path(report.nodeid, self._rootpath, self._invocation_path)
            record = _ExampleRecord(
                nodeid=report.nodeid,
                module_path=collected_from or file_path,
                file_path=file_path,
                line=None if lineno is None else lineno + 1,
            )
            self._records[report.nodeid] = record

        record.duration += report.duration

        if report.failed:
            if record.status is not ExampleStatus.FAILED:
                record.status = ExampleStatus.FAILED
                record.failure = failure if failure is not None else failure_from_report(report)
        elif report.skipped and record.status is ExampleStatus.PASSED:
            record.status = ExampleStatus.PENDING

    def results(self) -> tuple[ExampleResult, ...]:
        """Example results in run order."""
        return tuple(record.to_result() for record in self._records.values())


def build_summary(
    results: tuple[ExampleResult, ...],
    duration: float,
    seed: int | None,
) -> SummaryNotification:
    """Aggregate counts over example results."""
    return SummaryNotification(
        example_count=len(results),
        pending_count=sum(1 for r in results if r.status is ExampleStatus.PENDING),
        failure_count=sum(1 for r in results if r.status is ExampleStatus.FAILED),
        duration=duration,
        seed=seed,
    )


# =============================================================================
# Host settings
# =============================================================================


def resolve_seed(config: pytest.Config) -> int | None:
    """Random ordering seed of the run, None if ordering is not randomized."""
    for option in SEED_OPTIONS:
        value = config.getoption(option, default=None)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return None


class TerminalColorMode:
    """ColorModeSetting over pytest's terminal writer markup flag."""

    __slots__ = ("_writer",)

    def __init__(self, writer: TerminalWriter) -> None:
        self._writer = writer

    @property
    def enabled(self) -> bool:
        return self._writer.hasmarkup

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._writer.hasmarkup = value


def resolve_color_mode(terminalreporter: TerminalReporter | None) -> TerminalColorMode | None:
    """Resolve the host color capability once.

    Returns:
        Capability, or None if the terminal reporter has no recognized writer
    """
    if terminalreporter is None:
        return None
    writer = getattr(terminalreporter, "_tw", None)
    if writer is None or not isinstance(getattr(writer, "hasmarkup", None), bool):
        return None
    return TerminalColorMode(writer)


class TerminalSink:
    """OutputSink writing through the terminal reporter."""

    __slots__ = ("_reporter",)

    def __init__(self, terminalreporter: TerminalReporter) -> None:
        self._reporter = terminalreporter

    def write(self, text: str, /) -> None:
        self._reporter.write(text)
