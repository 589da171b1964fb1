"""Domain model: value objects exchanged between host and formatter."""

from problemreport.domain.model.configuration import FormatterConfig, RenderOptions
from problemreport.domain.model.enums import ExampleStatus, MissingLinePolicy
from problemreport.domain.model.example import ExampleGroup, ExampleResult, Failure
from problemreport.domain.model.notifications import (
    ExamplesNotification,
    RunStartNotification,
    SummaryNotification,
)

__all__ = [
    "ExampleGroup",
    "ExampleResult",
    "ExampleStatus",
    "ExamplesNotification",
    "Failure",
    "FormatterConfig",
    "MissingLinePolicy",
    "RenderOptions",
    "RunStartNotification",
    "SummaryNotification",
]
