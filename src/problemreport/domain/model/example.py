"""Example groups and per-example results."""

from __future__ import annotations

from dataclasses import dataclass

from problemreport.domain.model.enums import ExampleStatus


@dataclass(frozen=True, slots=True)
class ExampleGroup:
    """A describing group: test module, class, or nested class.

    Groups form a chain through `parent` links.
    The group with no parent is the outermost one (the test module).

    Attributes:
        description: Group name (module path or class name)
        file_path: File the group was defined in
        parent: Enclosing group, None for the outermost group
    """

    description: str
    file_path: str
    parent: ExampleGroup | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.description:
            raise ValueError("description must not be empty")
        if not self.file_path:
            raise ValueError("file_path must not be empty")

    @property
    def root(self) -> ExampleGroup:
        """Outermost group reachable through parent links."""
        group = self
        while group.parent is not None:
            group = group.parent
        return group


@dataclass(frozen=True, slots=True)
class Failure:
    """Exception raised by a failed example.

    Attributes:
        message: String representation of the exception
        exception_type: Exception class name
        backtrace: Formatted frames `path:line:in 'name'`, innermost first
    """

    message: str
    exception_type: str
    backtrace: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ExampleResult:
    """Outcome of one test example.

    Attributes:
        status: passed, pending or failed
        description: Full description (group names and example name)
        group: Innermost enclosing group
        file_path: File containing the example body
        line: 1-based line of the example definition, None if unknown
        duration: Execution time in seconds
        failure: Raised exception, present iff status is FAILED
    """

    status: ExampleStatus
    description: str
    group: ExampleGroup
    file_path: str
    line: int | None = None
    duration: float = 0.0
    failure: Failure | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")
        if self.line is not None and self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.status is ExampleStatus.FAILED and self.failure is None:
            raise TypeError("failed example requires a failure")
        if self.status is not ExampleStatus.FAILED and self.failure is not None:
            raise ValueError(f"{self.status.value} example must not carry a failure")

    @property
    def top_level_file_path(self) -> str:
        """File path of the outermost describing group."""
        return self.group.root.file_path
