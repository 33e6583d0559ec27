"""Configuration domain exports."""

from .app_name_detection import FALLBACK_APP_NAME, detect_app_name, find_git_root
from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigValidationFailed, load_run_config_file, resolve_run_config
from .runtime_settings import (
    AUDIT_METHODS,
    TEST_DEFAULT_METHODS,
    DataSource,
    RunConfig,
    RunLocation,
    apply_audit_overrides,
    apply_test_defaults,
)

__all__ = [
    "AUDIT_METHODS",
    "TEST_DEFAULT_METHODS",
    "DataSource",
    "RunConfig",
    "RunLocation",
    "apply_audit_overrides",
    "apply_test_defaults",
    "ConfigValidationFailed",
    "load_run_config_file",
    "resolve_run_config",
    "FALLBACK_APP_NAME",
    "detect_app_name",
    "find_git_root",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
