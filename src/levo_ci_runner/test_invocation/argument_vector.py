"""Argument vector construction for `levo remote-test-run`."""

from __future__ import annotations

from collections.abc import Sequence

from levo_ci_runner.configuration import DataSource, RunConfig

REMOTE_TEST_RUN_SUBCOMMAND = "remote-test-run"
_SECRET_FLAGS = frozenset({"--key"})


def build_remote_test_run_args(config: RunConfig) -> tuple[str, ...]:
    """Map a run configuration to the ordered Levo CLI arguments."""
    args = [
        REMOTE_TEST_RUN_SUBCOMMAND,
        "--key",
        config.auth_key,
        "--organization",
        config.organization_id,
        "--app-name",
        config.app_name,
        "--env",
        config.environment,
        "--data-source",
        config.data_source.value,
        "--run-on",
        config.run_on.value,
        "--target-url",
        config.target_url,
        "--fail-scope",
        config.fail_scope,
        "--fail-severity",
        config.fail_severity,
    ]
    if config.methods:
        args += ["--methods", config.methods]
    elif config.exclude_methods:
        args += ["--exclude-methods", config.exclude_methods]

    optional_flags = (
        ("--endpoint-pattern", config.endpoint_pattern),
        ("--exclude-endpoint-pattern", config.exclude_endpoint_pattern),
        ("--categories", config.categories),
        ("--fail-threshold", None if config.fail_threshold is None else str(config.fail_threshold)),
    )
    for flag, value in optional_flags:
        if value:
            args += [flag, value]

    if config.test_users and config.data_source is DataSource.TEST_USER_DATA:
        args += ["--test-users", config.test_users]

    args += ["--verbosity", "INFO"]
    return tuple(args)


def redact_args(args: Sequence[str]) -> tuple[str, ...]:
    """Replace secret flag values with a placeholder for logging."""
    redacted = list(args)
    for index, arg in enumerate(redacted[:-1]):
        if arg in _SECRET_FLAGS:
            redacted[index + 1] = "***"
    return tuple(redacted)
