"""Tests for virtual environment provisioning."""

from __future__ import annotations

from pathlib import Path

import pytest
from levo_ci_runner.bootstrap import EnvironmentCreationFailed, ensure_environment
from levo_ci_runner.command_execution import SubprocessExecutionError
from levo_ci_runner.interpreter_discovery import LocatedInterpreter, PythonVersion

_INTERPRETER = LocatedInterpreter(command=("py", "-3.13"), version=PythonVersion(3, 13, 1))


def _make_venv(venv_dir: Path) -> Path:
    venv_python = venv_dir / "bin" / "python"
    venv_python.parent.mkdir(parents=True)
    venv_python.touch()
    (venv_dir / "pyvenv.cfg").write_text("version = 3.x\n", encoding="utf-8")
    return venv_python.resolve()


def test_ensure_environment_creates_missing_environment(tmp_path: Path, recording_runner) -> None:
    venv_dir = tmp_path / "venv"

    layout = ensure_environment(venv_dir, _INTERPRETER, recording_runner)

    assert layout.root == venv_dir.resolve()
    assert [call.command for call in recording_runner.calls] == [
        ("py", "-3.13", "-m", "venv", str(venv_dir.resolve()))
    ]


def test_ensure_environment_reuses_compatible_environment(tmp_path: Path, recording_runner) -> None:
    venv_dir = tmp_path / "venv"
    venv_python = _make_venv(venv_dir)
    recording_runner.on(str(venv_python), "--version", stdout="Python 3.12.3")

    layout = ensure_environment(venv_dir, _INTERPRETER, recording_runner)

    assert layout.python == venv_python
    assert recording_runner.commands_containing("venv") == []
    assert (venv_dir / "pyvenv.cfg").exists()


def test_ensure_environment_recreates_environment_with_old_python(
    tmp_path: Path, recording_runner
) -> None:
    venv_dir = tmp_path / "venv"
    venv_python = _make_venv(venv_dir)
    recording_runner.on(str(venv_python), "--version", stdout="Python 3.11.9")

    ensure_environment(venv_dir, _INTERPRETER, recording_runner)

    assert not (venv_dir / "pyvenv.cfg").exists()
    assert recording_runner.commands_containing("-m", "venv") == [
        ("py", "-3.13", "-m", "venv", str(venv_dir.resolve()))
    ]


def test_ensure_environment_recreates_environment_without_interpreter(
    tmp_path: Path, recording_runner
) -> None:
    venv_dir = tmp_path / "venv"
    venv_dir.mkdir()
    (venv_dir / "leftover.txt").write_text("stale", encoding="utf-8")

    ensure_environment(venv_dir, _INTERPRETER, recording_runner)

    assert not (venv_dir / "leftover.txt").exists()
    assert len(recording_runner.commands_containing("-m", "venv")) == 1


def test_ensure_environment_raises_when_creation_exits_non_zero(
    tmp_path: Path, recording_runner
) -> None:
    recording_runner.on("-m", "venv", exit_code=1, stderr="Error: ensurepip failed")

    with pytest.raises(EnvironmentCreationFailed, match="exit code 1"):
        ensure_environment(tmp_path / "venv", _INTERPRETER, recording_runner)


def test_ensure_environment_raises_when_interpreter_cannot_start(
    tmp_path: Path, recording_runner
) -> None:
    recording_runner.on("-m", "venv", raises=SubprocessExecutionError("Command not found: py"))

    with pytest.raises(EnvironmentCreationFailed, match="Command not found"):
        ensure_environment(tmp_path / "venv", _INTERPRETER, recording_runner)
