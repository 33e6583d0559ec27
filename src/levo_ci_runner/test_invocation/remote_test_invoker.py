"""Execution of the Levo CLI against a target."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path

from levo_ci_runner.bootstrap import EnvironmentLayout
from levo_ci_runner.command_execution import CommandRunner, SubprocessExecutionError
from levo_ci_runner.configuration import RunConfig

from .argument_vector import build_remote_test_run_args, redact_args

logger = logging.getLogger(__name__)

BASE_URL_TOOL_VARIABLE = "LEVO_BASE_URL"


@dataclass(frozen=True)
class ExecutionResult:
    """Combined tool output and exit code of one test run."""

    output: str
    exit_code: int


def build_tool_environment(config: RunConfig) -> dict[str, str]:
    if config.base_url:
        return {BASE_URL_TOOL_VARIABLE: config.base_url}
    return {}


def run_remote_test(
    layout: EnvironmentLayout,
    config: RunConfig,
    runner: CommandRunner,
    *,
    log_path: Path,
) -> ExecutionResult:
    """Run `levo remote-test-run`, persist its output, and return the result.

    Raises:
      SubprocessExecutionError: If the Levo executable cannot be started.
    """
    args = build_remote_test_run_args(config)
    executable = str(layout.levo_executable)
    logger.debug("invoking %s", shlex.join((executable, *redact_args(args))))
    try:
        result = runner.run((executable, *args), env=build_tool_environment(config))
    except SubprocessExecutionError as exc:
        _write_log(log_path, str(exc))
        raise

    output = result.combined_output
    _write_log(log_path, output)
    return ExecutionResult(output=output, exit_code=result.exit_code)


def _write_log(log_path: Path, text: str) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_path.write_text(text, encoding="utf-8")
