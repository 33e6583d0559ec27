"""Environment bootstrap domain exports."""

from .environment_provisioner import (
    DEFAULT_VENV_DIR,
    EnvironmentCreationFailed,
    EnvironmentLayout,
    ensure_environment,
)

__all__ = [
    "DEFAULT_VENV_DIR",
    "EnvironmentCreationFailed",
    "EnvironmentLayout",
    "ensure_environment",
]
