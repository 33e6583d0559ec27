"""Package index settings resolved from the environment."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from levo_ci_runner.errors import LevoRunnerError

DEFAULT_INDEX_URL = "https://us-python.pkg.dev/levoai/levo-pypi/simple/"

INDEX_URL_VARIABLE = "PYPI_INDEX_URL"
USERNAME_VARIABLE = "PYPI_USERNAME"
PASSWORD_VARIABLE = "PYPI_PASSWORD"
CLI_VERSION_VARIABLE = "LEVOAI_CLI_VERSION"


class MissingCredential(LevoRunnerError):
    """Raised when only one half of the index credential pair is set."""


@dataclass(frozen=True)
class InstallSettings:
    """Where and which Levo CLI release to install from."""

    index_url: str = DEFAULT_INDEX_URL
    username: str | None = None
    password: str | None = None
    cli_version: str | None = None

    def __repr__(self) -> str:
        password = "***" if self.password else None
        return (
            f"InstallSettings(index_url={self.index_url!r}, username={self.username!r}, "
            f"password={password!r}, cli_version={self.cli_version!r})"
        )

    @property
    def has_credentials(self) -> bool:
        return self.username is not None and self.password is not None


def resolve_install_settings(environ: Mapping[str, str]) -> InstallSettings:
    """Build install settings, rejecting a half-configured credential pair."""
    username = _optional_value(environ, USERNAME_VARIABLE)
    password = _optional_value(environ, PASSWORD_VARIABLE)
    if username is not None and password is None:
        raise MissingCredential(
            f"{USERNAME_VARIABLE} is set but {PASSWORD_VARIABLE} is missing."
        )
    if password is not None and username is None:
        raise MissingCredential(
            f"{PASSWORD_VARIABLE} is set but {USERNAME_VARIABLE} is missing."
        )
    return InstallSettings(
        index_url=_optional_value(environ, INDEX_URL_VARIABLE) or DEFAULT_INDEX_URL,
        username=username,
        password=password,
        cli_version=_optional_value(environ, CLI_VERSION_VARIABLE),
    )


def _optional_value(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
