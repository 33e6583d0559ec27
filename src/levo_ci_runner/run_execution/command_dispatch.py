"""Command use cases: install, version, test and audit."""

from __future__ import annotations

import logging

from levo_ci_runner import console_reporting as console
from levo_ci_runner.bootstrap import EnvironmentLayout, ensure_environment
from levo_ci_runner.command_execution import CommandRunner, SubprocessExecutionError
from levo_ci_runner.configuration import (
    RunConfig,
    apply_audit_overrides,
    apply_test_defaults,
    resolve_run_config,
)
from levo_ci_runner.errors import LevoRunnerError
from levo_ci_runner.interpreter_discovery import locate_interpreter
from levo_ci_runner.package_installation import (
    InstallFailed,
    install_levo_cli,
    is_levo_installed,
    resolve_install_settings,
)
from levo_ci_runner.test_invocation import ExecutionResult, run_remote_test

from .run_contracts import InstallRequest, RunPaths, TestRunRequest

logger = logging.getLogger(__name__)


def execute_install(request: InstallRequest, runner: CommandRunner) -> int:
    """Provision the environment and install the Levo CLI into it."""
    try:
        layout = _prepare_environment(request.paths, runner)
        _install(layout, request, runner)
        if not is_levo_installed(layout, runner):
            raise InstallFailed(
                "Levo CLI is not reported by pip after installation.", request.paths.install_log
            )
    except LevoRunnerError as exc:
        _report_error(exc)
        return 1
    console.passed(f"Levo CLI installed in {layout.root}")
    return 0


def execute_version(request: InstallRequest, runner: CommandRunner) -> int:
    """Print the installed Levo CLI version and forward its exit code."""
    try:
        layout = _prepare_environment(request.paths, runner)
        result = runner.run((str(layout.levo_executable), "--version"))
    except SubprocessExecutionError as exc:
        _report_error(exc)
        console.error("Run the install command first.")
        return 1
    except LevoRunnerError as exc:
        _report_error(exc)
        return 1
    console.raw(result.combined_output)
    return result.exit_code


def execute_test(request: TestRunRequest, runner: CommandRunner) -> int:
    """Run a scoped security test; the tool exit code becomes the command result."""
    try:
        config = apply_test_defaults(_resolve_config(request))
        result = _run_levo(request, config, runner)
    except LevoRunnerError as exc:
        _report_error(exc)
        return 1
    if result.exit_code == 0:
        console.passed("Levo security tests passed.")
    else:
        console.failed(f"Levo security tests failed with exit code {result.exit_code}.")
    return result.exit_code


def execute_audit(request: TestRunRequest, runner: CommandRunner) -> int:
    """Run a full-coverage scan that never fails the build once it has run."""
    try:
        config = apply_audit_overrides(_resolve_config(request))
        result = _run_levo(request, config, runner)
    except LevoRunnerError as exc:
        _report_error(exc)
        return 1
    if result.exit_code == 0:
        console.passed("Levo audit completed without blocking findings.")
    else:
        console.warn(
            f"Levo audit finished with exit code {result.exit_code}; "
            "audit mode does not fail the build."
        )
    return 0


def _resolve_config(request: TestRunRequest) -> RunConfig:
    return resolve_run_config(
        request.options,
        request.environ,
        config_path=request.config_path,
        working_dir=request.working_dir,
    )


def _prepare_environment(paths: RunPaths, runner: CommandRunner) -> EnvironmentLayout:
    interpreter = locate_interpreter(runner)
    console.info(f"Using Python {interpreter.version} ({' '.join(interpreter.command)})")
    layout = ensure_environment(paths.venv_dir, interpreter, runner)
    console.info(f"Environment ready: {layout.root}")
    return layout


def _install(layout: EnvironmentLayout, request: InstallRequest, runner: CommandRunner) -> None:
    settings = resolve_install_settings(request.environ)
    console.info(f"Installing Levo CLI {settings.cli_version or '(latest)'}")
    outcome = install_levo_cli(layout, settings, runner, log_path=request.paths.install_log)
    for requirement in outcome.reinstall_failures:
        console.warn(f"Could not force-reinstall {requirement}; continuing.")


def _run_levo(request: TestRunRequest, config: RunConfig, runner: CommandRunner) -> ExecutionResult:
    layout = _prepare_environment(request.paths, runner)
    if not is_levo_installed(layout, runner):
        console.info("Levo CLI not found in the environment, installing.")
        _install(layout, InstallRequest(paths=request.paths, environ=request.environ), runner)
    console.info(f"Running Levo tests for {config.app_name} against {config.target_url}")
    logger.debug("effective configuration: %r", config)
    result = run_remote_test(layout, config, runner, log_path=request.paths.test_log)
    console.raw(result.output)
    console.info(f"Test output written to {request.paths.test_log}")
    return result


def _report_error(exc: LevoRunnerError) -> None:
    console.error(str(exc))
    if isinstance(exc, InstallFailed) and exc.log_path is not None:
        console.error(f"Full installer output: {exc.log_path}")
