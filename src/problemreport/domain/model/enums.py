"""Domain enumerations."""

from enum import Enum


class ExampleStatus(Enum):
    """Outcome of a single test example."""

    PASSED = "passed"
    PENDING = "pending"  # skipped or expected failure
    FAILED = "failed"


class MissingLinePolicy(Enum):
    """What to report when no backtrace frame references the example file."""

    EXAMPLE = "example"  # example's declared line, 0 when unknown
    ZERO = "zero"
    EMPTY = "empty"
    ERROR = "error"  # raise BacktraceMatchError
