"""Subprocess seam shared by every runner domain."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Protocol

from levo_ci_runner.errors import LevoRunnerError

logger = logging.getLogger(__name__)


class SubprocessExecutionError(LevoRunnerError):
    """Raised when an external command cannot be spawned."""


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one finished external command."""

    command: tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def combined_output(self) -> str:
        """Join the non-empty streams, stdout first."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr


class CommandRunner(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for running one external command to completion."""

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult: ...


class SubprocessCommandRunner:  # pylint: disable=too-few-public-methods
    """Blocking runner that captures both streams through temporary files."""

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        resolved_command = tuple(command)
        command_env = {**os.environ, **env} if env else None
        executable = resolved_command[0]
        logger.debug("running %s", executable)
        with tempfile.TemporaryFile() as stdout_file, tempfile.TemporaryFile() as stderr_file:
            try:
                completed = subprocess.run(
                    list(resolved_command),
                    cwd=cwd,
                    env=command_env,
                    stdout=stdout_file,
                    stderr=stderr_file,
                    check=False,
                )
            except FileNotFoundError as exc:
                raise SubprocessExecutionError(f"Command not found: {executable}") from exc
            except OSError as exc:
                raise SubprocessExecutionError(
                    f"Command could not be started: {executable} ({exc})"
                ) from exc
            stdout = _read_captured(stdout_file)
            stderr = _read_captured(stderr_file)
        logger.debug("exit code %s from %s", completed.returncode, executable)
        return CommandResult(
            command=resolved_command,
            exit_code=completed.returncode,
            stdout=stdout,
            stderr=stderr,
        )


def _read_captured(handle: IO[bytes]) -> str:
    handle.seek(0)
    return handle.read().decode("utf-8", errors="replace").strip()
