"""Shared test doubles."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from levo_ci_runner.command_execution import CommandResult


@dataclass
class _Rule:
    fragment: tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str
    raises: Exception | None


@dataclass
class RecordedCall:
    command: tuple[str, ...]
    cwd: Path | None
    env: Mapping[str, str] | None


@dataclass
class RecordingRunner:
    """Command runner double that answers by command fragment and records calls."""

    calls: list[RecordedCall] = field(default_factory=list)
    _rules: list[_Rule] = field(default_factory=list)

    def on(
        self,
        *fragment: str,
        exit_code: int = 0,
        stdout: str = "",
        stderr: str = "",
        raises: Exception | None = None,
    ) -> RecordingRunner:
        self._rules.append(_Rule(tuple(fragment), exit_code, stdout, stderr, raises))
        return self

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        resolved = tuple(command)
        self.calls.append(RecordedCall(resolved, cwd, env))
        for rule in self._rules:
            if _contains(resolved, rule.fragment):
                if rule.raises is not None:
                    raise rule.raises
                return CommandResult(resolved, rule.exit_code, rule.stdout, rule.stderr)
        return CommandResult(resolved, 0, "", "")

    def commands_containing(self, *fragment: str) -> list[tuple[str, ...]]:
        return [call.command for call in self.calls if _contains(call.command, fragment)]


def _contains(command: tuple[str, ...], fragment: tuple[str, ...]) -> bool:
    size = len(fragment)
    return any(command[index : index + size] == fragment for index in range(len(command) - size + 1))


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def python313_runner() -> RecordingRunner:
    """Runner where `py -3.13` is the first compatible interpreter."""
    return RecordingRunner().on("py", "-3.13", "--version", stdout="Python 3.13.1")
