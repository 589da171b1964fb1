"""problemreport - pytest results in an editor problem-matcher friendly format."""

__version__ = "0.1.0"

from problemreport.application.reporters.problem_matcher import ProblemMatcherFormatter

__all__ = ["ProblemMatcherFormatter", "__version__"]
