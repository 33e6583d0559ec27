"""Levo test invocation domain exports."""

from .argument_vector import REMOTE_TEST_RUN_SUBCOMMAND, build_remote_test_run_args, redact_args
from .remote_test_invoker import (
    BASE_URL_TOOL_VARIABLE,
    ExecutionResult,
    build_tool_environment,
    run_remote_test,
)

__all__ = [
    "REMOTE_TEST_RUN_SUBCOMMAND",
    "build_remote_test_run_args",
    "redact_args",
    "BASE_URL_TOOL_VARIABLE",
    "ExecutionResult",
    "build_tool_environment",
    "run_remote_test",
]
