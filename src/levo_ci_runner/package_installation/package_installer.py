"""Installation of the Levo CLI into the provisioned environment."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, urlsplit, urlunsplit

from levo_ci_runner.bootstrap import EnvironmentLayout
from levo_ci_runner.command_execution import (
    CommandResult,
    CommandRunner,
    SubprocessExecutionError,
)
from levo_ci_runner.errors import LevoRunnerError

from .install_settings import InstallSettings

logger = logging.getLogger(__name__)

LEVO_PACKAGE_NAME = "levo"
PUBLIC_INDEX_URL = "https://pypi.org/simple"

# numpy stays below 2 because levo's compiled dependencies are built against the 1.x ABI.
NATIVE_EXTENSION_PACKAGES = (
    "cffi",
    "cryptography",
    "charset-normalizer",
    "markupsafe",
    "pyyaml",
    "rpds-py",
    "numpy<2",
)


class InstallFailed(LevoRunnerError):
    """Raised when the Levo CLI cannot be installed."""

    def __init__(self, message: str, log_path: Path | None = None) -> None:
        super().__init__(message)
        self.log_path = log_path


@dataclass(frozen=True)
class InstallOutcome:
    """Result of a successful installation."""

    log_path: Path
    reinstall_failures: tuple[str, ...]


def build_index_url(settings: InstallSettings) -> str:
    """Return the index URL, embedding credentials when both are configured."""
    if not settings.has_credentials:
        return settings.index_url
    parts = urlsplit(settings.index_url)
    username = quote(settings.username or "", safe="")
    password = quote(settings.password or "", safe="")
    credentials = f"{username}:{password}"
    netloc = f"{credentials}@{parts.hostname or ''}"
    if parts.port is not None:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def trusted_host(index_url: str) -> str:
    return urlsplit(index_url).hostname or ""


def build_package_spec(cli_version: str | None) -> str:
    if cli_version:
        return f"{LEVO_PACKAGE_NAME}=={cli_version}"
    return LEVO_PACKAGE_NAME


def is_levo_installed(layout: EnvironmentLayout, runner: CommandRunner) -> bool:
    """Report whether `pip show levo` finds the package in the environment."""
    try:
        result = runner.run((str(layout.python), "-m", "pip", "show", LEVO_PACKAGE_NAME))
    except SubprocessExecutionError as exc:
        logger.debug("pip show failed to start: %s", exc)
        return False
    return result.succeeded


def install_levo_cli(
    layout: EnvironmentLayout,
    settings: InstallSettings,
    runner: CommandRunner,
    *,
    log_path: Path,
) -> InstallOutcome:
    """Install the Levo CLI, then force-reinstall native-extension dependencies.

    Args:
      layout: Environment that receives the package.
      settings: Package index and version selection.
      runner: Command runner used for every pip invocation.
      log_path: Installer log, overwritten with the pip output of this run.

    Returns:
      The log path and the native-extension packages whose reinstall failed.

    Raises:
      InstallFailed: If the main pip install exits non-zero or cannot start.
    """
    index_url = build_index_url(settings)
    command = (
        str(layout.python),
        "-m",
        "pip",
        "install",
        "--no-cache-dir",
        "--upgrade",
        "--index-url",
        index_url,
        "--extra-index-url",
        PUBLIC_INDEX_URL,
        "--trusted-host",
        trusted_host(index_url),
        build_package_spec(settings.cli_version),
    )
    try:
        result = runner.run(command)
    except SubprocessExecutionError as exc:
        message = _mask_password(str(exc), settings)
        _write_log(log_path, [message], settings)
        raise InstallFailed(message, log_path) from exc

    log_sections = [_format_log_section(result)]
    if not result.succeeded:
        _write_log(log_path, log_sections, settings)
        raise InstallFailed(f"pip install exited with code {result.exit_code}.", log_path)

    reinstall_failures = []
    for requirement in NATIVE_EXTENSION_PACKAGES:
        failure = _force_reinstall(layout, requirement, index_url, runner)
        if failure is not None:
            logger.warning("reinstall of %s failed, continuing", requirement)
            reinstall_failures.append(requirement)
            log_sections.append(failure)

    _write_log(log_path, log_sections, settings)
    return InstallOutcome(log_path=log_path, reinstall_failures=tuple(reinstall_failures))


def _force_reinstall(
    layout: EnvironmentLayout, requirement: str, index_url: str, runner: CommandRunner
) -> str | None:
    """Reinstall one package; returns a log section on failure, None on success."""
    command = (
        str(layout.python),
        "-m",
        "pip",
        "install",
        "--force-reinstall",
        "--no-cache-dir",
        "--no-deps",
        "--index-url",
        index_url,
        "--extra-index-url",
        PUBLIC_INDEX_URL,
        "--trusted-host",
        trusted_host(index_url),
        requirement,
    )
    try:
        result = runner.run(command)
    except SubprocessExecutionError as exc:
        return f"WARNING: {exc}"
    if result.succeeded:
        return None
    return f"WARNING: reinstall of {requirement} failed\n{_format_log_section(result)}"


def _format_log_section(result: CommandResult) -> str:
    return f"$ {shlex.join(result.command)}\n[exit code {result.exit_code}]\n{result.combined_output}"


def _write_log(log_path: Path, sections: list[str], settings: InstallSettings) -> None:
    text = _mask_password("\n\n".join(sections) + "\n", settings)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_path.write_text(text, encoding="utf-8")


def _mask_password(text: str, settings: InstallSettings) -> str:
    if not settings.password:
        return text
    text = text.replace(quote(settings.password, safe=""), "***")
    return text.replace(settings.password, "***")
