"""Reporters for test run results.

ProblemMatcherFormatter renders the line-oriented problem-matcher report.
Helpers are exposed for hosts that build their own reports.
"""

from problemreport.application.reporters.backtrace import find_failure_line
from problemreport.application.reporters.color import suppressed_color
from problemreport.application.reporters.messages import (
    flatten_failure_message,
    strip_diff_colors,
)
from problemreport.application.reporters.problem_matcher import ProblemMatcherFormatter

__all__ = [
    "ProblemMatcherFormatter",
    "find_failure_line",
    "flatten_failure_message",
    "strip_diff_colors",
    "suppressed_color",
]
