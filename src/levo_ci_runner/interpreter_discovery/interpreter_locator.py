"""Local Python interpreter discovery."""

from __future__ import annotations

import logging
import re
import shlex
from dataclasses import dataclass

from levo_ci_runner.command_execution import CommandRunner, SubprocessExecutionError
from levo_ci_runner.errors import LevoRunnerError

logger = logging.getLogger(__name__)

MINIMUM_MINOR_VERSION = 12
LAUNCHER_MINOR_VERSIONS = (14, 13, 12)
VERSIONED_BINARIES = ("python3.14", "python3.13", "python3.12")

_VERSION_BANNER = re.compile(r"Python\s+(\d+)\.(\d+)(?:\.(\d+))?")


class InterpreterNotFound(LevoRunnerError):
    """Raised when no compatible Python interpreter is available."""


@dataclass(frozen=True, order=True)
class PythonVersion:
    """Interpreter version as reported by `--version`."""

    major: int
    minor: int
    micro: int = 0

    @property
    def is_supported(self) -> bool:
        return self.major == 3 and self.minor >= MINIMUM_MINOR_VERSION

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.micro}"


@dataclass(frozen=True)
class LocatedInterpreter:
    """Invocation form and version of a compatible interpreter."""

    command: tuple[str, ...]
    version: PythonVersion


def parse_python_version(text: str) -> PythonVersion | None:
    """Parse a `Python X.Y.Z` banner, returning None when none is present."""
    match = _VERSION_BANNER.search(text)
    if match is None:
        return None
    major, minor, micro = match.groups()
    return PythonVersion(int(major), int(minor), int(micro or 0))


def interpreter_candidates() -> tuple[tuple[str, ...], ...]:
    """Return invocation forms in the order they are probed."""
    launcher_forms = tuple(("py", f"-3.{minor}") for minor in LAUNCHER_MINOR_VERSIONS)
    binary_forms = tuple((binary,) for binary in VERSIONED_BINARIES)
    return launcher_forms + binary_forms


def query_python_version(command: tuple[str, ...], runner: CommandRunner) -> PythonVersion | None:
    """Ask one interpreter for its version; None when it cannot answer."""
    try:
        result = runner.run((*command, "--version"))
    except SubprocessExecutionError as exc:
        logger.debug("interpreter probe failed: %s", exc)
        return None
    if not result.succeeded:
        return None
    return parse_python_version(result.combined_output)


def locate_interpreter(runner: CommandRunner) -> LocatedInterpreter:
    """Return the first candidate reporting Python 3.12 or newer."""
    candidates = interpreter_candidates()
    for command in candidates:
        version = query_python_version(command, runner)
        if version is None:
            continue
        if not version.is_supported:
            logger.debug("skipping %s: Python %s is too old", shlex.join(command), version)
            continue
        return LocatedInterpreter(command=command, version=version)
    tried = ", ".join(shlex.join(command) for command in candidates)
    raise InterpreterNotFound(
        f"Python 3.{MINIMUM_MINOR_VERSION}+ was not found. Tried: {tried}"
    )
