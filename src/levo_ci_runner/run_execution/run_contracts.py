"""Run execution entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

INSTALL_LOG_FILENAME = "levo-install.log"
TEST_LOG_FILENAME = "levo-test-output.log"


@dataclass(frozen=True)
class RunPaths:
    """On-disk locations shared by every command."""

    venv_dir: Path
    log_dir: Path

    @property
    def install_log(self) -> Path:
        return self.log_dir / INSTALL_LOG_FILENAME

    @property
    def test_log(self) -> Path:
        return self.log_dir / TEST_LOG_FILENAME


@dataclass(frozen=True)
class InstallRequest:
    """Input contract for `install` and `version`."""

    paths: RunPaths
    environ: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TestRunRequest:
    """Input contract for `test` and `audit`."""

    __test__ = False

    paths: RunPaths
    options: Mapping[str, Any]
    environ: Mapping[str, str] = field(default_factory=dict)
    config_path: str | None = None
    working_dir: Path | None = None
