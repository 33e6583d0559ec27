"""Command execution domain exports."""

from .command_runner import (
    CommandResult,
    CommandRunner,
    SubprocessCommandRunner,
    SubprocessExecutionError,
)

__all__ = [
    "CommandResult",
    "CommandRunner",
    "SubprocessCommandRunner",
    "SubprocessExecutionError",
]
