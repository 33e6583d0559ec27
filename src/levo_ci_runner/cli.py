"""Command line interface entry point."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from levo_ci_runner.bootstrap import DEFAULT_VENV_DIR
from levo_ci_runner.command_execution import SubprocessCommandRunner
from levo_ci_runner.configuration import (
    DEFAULT_CONFIG_FILENAME,
    DataSource,
    RunLocation,
    write_placeholder_configuration,
)
from levo_ci_runner.run_execution import (
    InstallRequest,
    RunPaths,
    TestRunRequest,
    execute_audit,
    execute_install,
    execute_test,
    execute_version,
)


class CliError(Exception):
    """Custom CLI error."""


_RUN_CONFIG_OPTIONS = (
    click.option("--key", "auth_key", help="Levo authorization key [env: LEVOAI_AUTH_KEY]"),
    click.option(
        "--organization", "organization_id", help="Levo organization id [env: LEVOAI_ORG_ID]"
    ),
    click.option("--app-name", help="Application name; auto-detected when omitted"),
    click.option("--env", "environment", help="Target environment label [default: staging]"),
    click.option("--target-url", help="Base URL of the API under test"),
    click.option("--methods", help="Comma-separated HTTP methods to test"),
    click.option("--exclude-methods", help="Comma-separated HTTP methods to skip"),
    click.option(
        "--data-source",
        type=click.Choice([member.value for member in DataSource], case_sensitive=False),
        help="Request data source [default: Traces]",
    ),
    click.option(
        "--run-on",
        type=click.Choice([member.value for member in RunLocation], case_sensitive=False),
        help="Where the test run executes [default: cloud]",
    ),
    click.option("--endpoint-pattern", help="Regex of endpoints to include"),
    click.option("--exclude-endpoint-pattern", help="Regex of endpoints to exclude"),
    click.option("--categories", help="Comma-separated test categories"),
    click.option("--fail-scope", help="Which findings count toward failure [default: all]"),
    click.option("--fail-severity", help="Minimum failing severity [default: high]"),
    click.option("--fail-threshold", help="Number of findings tolerated before failing"),
    click.option("--test-users", help="Test users; only used with --data-source TestUserData"),
    click.option("--base-url", help="Levo platform base URL [env: LEVOAI_BASE_URL]"),
    click.option(
        "--config",
        "config_path",
        type=click.Path(path_type=str),
        help="Optional YAML run configuration file",
    ),
)


def run_config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(_RUN_CONFIG_OPTIONS):
        func = option(func)
    return func


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="levo-ci-runner")
@click.option(
    "--venv-dir",
    envvar="LEVO_VENV_DIR",
    default=str(DEFAULT_VENV_DIR),
    show_default=True,
    type=click.Path(path_type=Path),
    help="Virtual environment that hosts the Levo CLI",
)
@click.option(
    "--log-dir",
    envvar="LEVO_LOG_DIR",
    default=".",
    show_default=True,
    type=click.Path(path_type=Path),
    help="Directory for the installer and test output logs",
)
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, venv_dir: Path, log_dir: Path, verbose: bool) -> None:
    """Install the Levo CLI and run API security tests from CI pipelines."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )
    ctx.obj = RunPaths(venv_dir=venv_dir, log_dir=log_dir)


@cli.command(name="install")
@click.pass_obj
def install(paths: RunPaths) -> None:
    """Provision the virtual environment and install the Levo CLI."""
    exit_code = execute_install(
        InstallRequest(paths=paths, environ=dict(os.environ)), SubprocessCommandRunner()
    )
    click.get_current_context().exit(exit_code)


@cli.command(name="version")
@click.pass_obj
def version(paths: RunPaths) -> None:
    """Print the installed Levo CLI version."""
    exit_code = execute_version(
        InstallRequest(paths=paths, environ=dict(os.environ)), SubprocessCommandRunner()
    )
    click.get_current_context().exit(exit_code)


@cli.command(name="test")
@run_config_options
@click.pass_obj
def run_tests(paths: RunPaths, config_path: str | None, **options: Any) -> None:
    """Run scoped security tests; fails the build on violations."""
    exit_code = execute_test(
        _build_test_run_request(paths, config_path, options), SubprocessCommandRunner()
    )
    click.get_current_context().exit(exit_code)


@cli.command(name="audit")
@run_config_options
@click.pass_obj
def run_audit(paths: RunPaths, config_path: str | None, **options: Any) -> None:
    """Run a full-coverage scan that never fails the build."""
    exit_code = execute_audit(
        _build_test_run_request(paths, config_path, options), SubprocessCommandRunner()
    )
    click.get_current_context().exit(exit_code)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML run configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML run configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="help")
@click.pass_context
def show_help(ctx: click.Context) -> None:
    """Show usage information."""
    parent = ctx.parent if ctx.parent is not None else ctx
    click.echo(parent.get_help())


def _build_test_run_request(
    paths: RunPaths, config_path: str | None, options: dict[str, Any]
) -> TestRunRequest:
    return TestRunRequest(
        paths=paths,
        options=options,
        environ=dict(os.environ),
        config_path=config_path,
        working_dir=Path.cwd(),
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
