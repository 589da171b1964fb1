"""Command line and ini options of the pytest plugin.

Command line values override ini values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from problemreport.domain.exceptions import InvalidOptionError
from problemreport.domain.model.configuration import (
    DEFAULT_ENV_PREFIX,
    DEFAULT_ENV_VAR,
    FormatterConfig,
)
from problemreport.domain.model.enums import MissingLinePolicy

if TYPE_CHECKING:
    import pytest

MISSING_LINE_CHOICES = tuple(policy.value for policy in MissingLinePolicy)


def add_options(parser: pytest.Parser) -> None:
    """Register command line options and ini keys."""
    group = parser.getgroup("problemreport", "problem matcher report")
    group.addoption(
        "--problem-matcher",
        action="store_true",
        dest="problem_matcher",
        default=None,
        help="Print results in a problem-matcher friendly line format.",
    )
    group.addoption(
        "--problem-matcher-output",
        dest="problem_matcher_output",
        metavar="PATH",
        default=None,
        help="Write the problem matcher report to PATH instead of the terminal.",
    )
    group.addoption(
        "--problem-matcher-missing-line",
        dest="problem_matcher_missing_line",
        choices=MISSING_LINE_CHOICES,
        default=None,
        help=(
            "Line reported when no traceback frame is in the test file: "
            "example (test definition line), zero, empty, or error."
        ),
    )

    parser.addini(
        "problem_matcher",
        "Enable the problem matcher report.",
        type="bool",
        default=False,
    )
    parser.addini(
        "problem_matcher_output",
        "Problem matcher report file (default: terminal).",
        default="",
    )
    parser.addini(
        "problem_matcher_missing_line",
        f"Missing traceback line policy: {', '.join(MISSING_LINE_CHOICES)}.",
        default=MissingLinePolicy.EXAMPLE.value,
    )
    parser.addini(
        "problem_matcher_env_var",
        "Environment variable holding the parallel shard index.",
        default=DEFAULT_ENV_VAR,
    )
    parser.addini(
        "problem_matcher_env_prefix",
        "Prefix of the TestEnvNumber value.",
        default=DEFAULT_ENV_PREFIX,
    )


def _get_value(config: pytest.Config, name: str) -> object:
    """Get command line value, falling back to the ini value.

    Args:
        config: pytest Config object
        name: option dest, same as the ini key

    Returns:
        Command line value if given, ini value otherwise
    """
    value = config.getoption(name, default=None)
    if value is not None:
        return value
    return config.getini(name)


def is_enabled(config: pytest.Config) -> bool:
    """Whether the report was requested."""
    return bool(_get_value(config, "problem_matcher"))


def output_path(config: pytest.Config) -> str | None:
    """Report file path, None for the terminal."""
    value = str(_get_value(config, "problem_matcher_output") or "")
    return value or None


def load_config(config: pytest.Config) -> FormatterConfig:
    """Build formatter configuration from options.

    Raises:
        InvalidOptionError: missing line policy is not a known value
    """
    policy_value = str(_get_value(config, "problem_matcher_missing_line")).strip().lower()
    try:
        policy = MissingLinePolicy(policy_value)
    except ValueError:
        raise InvalidOptionError(
            option="problem_matcher_missing_line",
            value=policy_value,
            allowed=MISSING_LINE_CHOICES,
        ) from None

    env_var = str(config.getini("problem_matcher_env_var")) or DEFAULT_ENV_VAR
    return FormatterConfig(
        env_var=env_var,
        env_prefix=str(config.getini("problem_matcher_env_prefix")),
        missing_line=policy,
    )
