"""Package installation domain exports."""

from .install_settings import (
    DEFAULT_INDEX_URL,
    InstallSettings,
    MissingCredential,
    resolve_install_settings,
)
from .package_installer import (
    LEVO_PACKAGE_NAME,
    NATIVE_EXTENSION_PACKAGES,
    InstallFailed,
    InstallOutcome,
    build_index_url,
    build_package_spec,
    install_levo_cli,
    is_levo_installed,
    trusted_host,
)

__all__ = [
    "DEFAULT_INDEX_URL",
    "InstallSettings",
    "MissingCredential",
    "resolve_install_settings",
    "LEVO_PACKAGE_NAME",
    "NATIVE_EXTENSION_PACKAGES",
    "InstallFailed",
    "InstallOutcome",
    "build_index_url",
    "build_package_spec",
    "install_levo_cli",
    "is_levo_installed",
    "trusted_host",
]
