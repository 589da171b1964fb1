"""Formatter configuration and per-render options."""

from __future__ import annotations

from dataclasses import dataclass

from problemreport.domain.model.enums import MissingLinePolicy

DEFAULT_ENV_VAR = "TEST_ENV_NUMBER"
DEFAULT_ENV_PREFIX = "rspec"


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options passed explicitly into a single render.

    Attributes:
        colorize: Emit terminal color sequences. The report never does.
    """

    colorize: bool = False


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Formatter configuration DTO.

    All fields have defaults that keep the output compatible with
    existing problem matchers.

    Attributes:
        env_var: Environment variable holding the parallel shard index.
        env_prefix: Literal prefix of the TestEnvNumber value.
        missing_line: Policy when no backtrace frame matches the example file.
    """

    env_var: str = DEFAULT_ENV_VAR
    env_prefix: str = DEFAULT_ENV_PREFIX
    missing_line: MissingLinePolicy = MissingLinePolicy.EXAMPLE

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.env_var:
            raise ValueError("env_var must not be empty")
