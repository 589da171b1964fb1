"""pytest plugin for problemreport.

Prints test results in a line-oriented format for editor problem matchers.
Registered through the `pytest11` entry point, inactive until enabled.

Configuration (command line, or pytest.ini / pyproject.toml):
    --problem-matcher / problem_matcher: enable the report
    --problem-matcher-output / problem_matcher_output: report file
    --problem-matcher-missing-line / problem_matcher_missing_line:
        example (default), zero, empty, error
    problem_matcher_env_var: shard index variable (default: TEST_ENV_NUMBER)
    problem_matcher_env_prefix: TestEnvNumber prefix (default: rspec)
"""

from __future__ import annotations

import pytest

from problemreport.application.reporters.problem_matcher import ProblemMatcherFormatter
from problemreport.domain.exceptions import InvalidOptionError, UnsupportedColorModeWarning
from problemreport.domain.ports.output import OutputSink
from problemreport.presentation.pytest_plugin.adapters import TerminalSink, resolve_color_mode
from problemreport.presentation.pytest_plugin.options import (
    add_options,
    is_enabled,
    load_config,
    output_path,
)
from problemreport.presentation.pytest_plugin.plugin import ProblemMatcherPlugin

PLUGIN_NAME = "problemreport-formatter"

plugin_key = pytest.StashKey[ProblemMatcherPlugin]()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register problem matcher options."""
    add_options(parser)


@pytest.hookimpl(trylast=True)
def pytest_configure(config: pytest.Config) -> None:
    """Create and register the formatter plugin when enabled.

    Runs after the terminal plugin so its writer can be resolved.
    Distributed workers skip registration: the controller reports.
    """
    if not is_enabled(config) or hasattr(config, "workerinput"):
        return

    try:
        formatter_config = load_config(config)
    except InvalidOptionError as exc:
        raise pytest.UsageError(str(exc)) from exc

    terminal = config.pluginmanager.get_plugin("terminalreporter")
    color_mode = resolve_color_mode(terminal)
    if color_mode is None:
        config.issue_config_time_warning(
            UnsupportedColorModeWarning(
                "problemreport cannot prevent colorizing: no recognized terminal color setting"
            ),
            stacklevel=2,
        )

    path = output_path(config)
    stream = open(path, "w", encoding="utf-8") if path else None  # noqa: SIM115
    output: OutputSink | None = stream
    if output is None and terminal is not None:
        output = TerminalSink(terminal)

    formatter = ProblemMatcherFormatter(
        output,
        config=formatter_config,
        color_mode=color_mode,
    )
    plugin = ProblemMatcherPlugin(
        config,
        formatter,
        has_terminal=terminal is not None,
        stream=stream,
    )
    config.stash[plugin_key] = plugin
    config.pluginmanager.register(plugin, PLUGIN_NAME)


def pytest_unconfigure(config: pytest.Config) -> None:
    """Unregister the formatter plugin and close its report file."""
    plugin = config.stash.get(plugin_key, None)
    if plugin is None:
        return
    del config.stash[plugin_key]
    plugin.close()
    config.pluginmanager.unregister(plugin)
