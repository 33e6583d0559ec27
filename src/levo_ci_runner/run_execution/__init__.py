"""Run execution domain exports."""

from .command_dispatch import execute_audit, execute_install, execute_test, execute_version
from .run_contracts import (
    INSTALL_LOG_FILENAME,
    TEST_LOG_FILENAME,
    InstallRequest,
    RunPaths,
    TestRunRequest,
)

__all__ = [
    "INSTALL_LOG_FILENAME",
    "TEST_LOG_FILENAME",
    "InstallRequest",
    "RunPaths",
    "TestRunRequest",
    "execute_audit",
    "execute_install",
    "execute_test",
    "execute_version",
]
