"""Provisioning of the isolated environment that hosts the Levo CLI."""

from __future__ import annotations

import logging
import shlex
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from levo_ci_runner.command_execution import CommandRunner, SubprocessExecutionError
from levo_ci_runner.errors import LevoRunnerError
from levo_ci_runner.interpreter_discovery import LocatedInterpreter, query_python_version

logger = logging.getLogger(__name__)

DEFAULT_VENV_DIR = Path.home() / ".levo" / "venv"


class EnvironmentCreationFailed(LevoRunnerError):
    """Raised when the virtual environment cannot be created."""


@dataclass(frozen=True)
class EnvironmentLayout:
    """Paths inside one virtual environment."""

    root: Path

    @property
    def python(self) -> Path:
        existing = _find_existing_venv_python(self.root)
        return existing if existing is not None else _default_venv_python_path(self.root)

    @property
    def levo_executable(self) -> Path:
        return _default_venv_script_path(self.root, "levo")


def ensure_environment(
    venv_dir: Path, interpreter: LocatedInterpreter, runner: CommandRunner
) -> EnvironmentLayout:
    """Reuse `venv_dir` when its interpreter is 3.12+, otherwise recreate it."""
    resolved_venv_dir = venv_dir.expanduser().resolve()
    layout = EnvironmentLayout(resolved_venv_dir)
    venv_python = _find_existing_venv_python(resolved_venv_dir)
    if venv_python is not None:
        version = query_python_version((str(venv_python),), runner)
        if version is not None and version.is_supported:
            logger.debug("reusing environment %s (Python %s)", resolved_venv_dir, version)
            return layout
        logger.info(
            "environment %s reports Python %s, recreating",
            resolved_venv_dir,
            version or "unknown",
        )

    if resolved_venv_dir.exists():
        shutil.rmtree(resolved_venv_dir)
    _create_environment(resolved_venv_dir, interpreter, runner)
    return layout


def _create_environment(
    venv_dir: Path, interpreter: LocatedInterpreter, runner: CommandRunner
) -> None:
    command = (*interpreter.command, "-m", "venv", str(venv_dir))
    try:
        result = runner.run(command)
    except SubprocessExecutionError as exc:
        raise EnvironmentCreationFailed(str(exc)) from exc
    if not result.succeeded:
        raise EnvironmentCreationFailed(
            f"Environment creation failed with exit code {result.exit_code}: "
            f"{shlex.join(command)}\n{result.combined_output}".rstrip()
        )


def _find_existing_venv_python(venv_dir: Path) -> Path | None:
    """Return the environment interpreter if present."""
    for candidate in _venv_python_candidates(venv_dir):
        if candidate.exists():
            return candidate
    return None


def _venv_python_candidates(venv_dir: Path) -> tuple[Path, Path]:
    return (
        venv_dir / "Scripts" / "python.exe",
        venv_dir / "bin" / "python",
    )


def _default_venv_python_path(venv_dir: Path) -> Path:
    return _default_venv_script_path(venv_dir, "python")


def _default_venv_script_path(venv_dir: Path, name: str) -> Path:
    if sys.platform.startswith("win"):
        return venv_dir / "Scripts" / f"{name}.exe"
    return venv_dir / "bin" / name
