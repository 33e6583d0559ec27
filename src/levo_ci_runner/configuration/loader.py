"""Layered run-configuration resolver."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from levo_ci_runner.errors import LevoRunnerError

from .app_name_detection import detect_app_name
from .runtime_settings import DataSource, RunConfig, RunLocation

KNOWN_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

# field name -> (environment variable, CLI option used in messages)
FIELD_SOURCES: dict[str, tuple[str, str]] = {
    "auth_key": ("LEVOAI_AUTH_KEY", "--key"),
    "organization_id": ("LEVOAI_ORG_ID", "--organization"),
    "app_name": ("LEVOAI_APP_NAME", "--app-name"),
    "environment": ("LEVOAI_ENV", "--env"),
    "target_url": ("LEVOAI_TARGET_URL", "--target-url"),
    "methods": ("LEVOAI_METHODS", "--methods"),
    "exclude_methods": ("LEVOAI_EXCLUDE_METHODS", "--exclude-methods"),
    "data_source": ("LEVOAI_DATA_SOURCE", "--data-source"),
    "run_on": ("LEVOAI_RUN_ON", "--run-on"),
    "endpoint_pattern": ("LEVOAI_ENDPOINT_PATTERN", "--endpoint-pattern"),
    "exclude_endpoint_pattern": ("LEVOAI_EXCLUDE_ENDPOINT_PATTERN", "--exclude-endpoint-pattern"),
    "categories": ("LEVOAI_CATEGORIES", "--categories"),
    "fail_scope": ("LEVOAI_FAIL_SCOPE", "--fail-scope"),
    "fail_severity": ("LEVOAI_FAIL_SEVERITY", "--fail-severity"),
    "fail_threshold": ("LEVOAI_FAIL_THRESHOLD", "--fail-threshold"),
    "test_users": ("LEVOAI_TEST_USERS", "--test-users"),
    "base_url": ("LEVOAI_BASE_URL", "--base-url"),
}

FIELD_DEFAULTS: dict[str, str] = {
    "environment": "staging",
    "data_source": DataSource.TRACES.value,
    "run_on": RunLocation.CLOUD.value,
    "fail_scope": "all",
    "fail_severity": "high",
}

REQUIRED_FIELDS = ("auth_key", "organization_id", "target_url")


class ConfigValidationFailed(LevoRunnerError):
    """Raised when the effective run configuration is incomplete or invalid."""


def resolve_run_config(
    options: Mapping[str, Any],
    environ: Mapping[str, str],
    *,
    config_path: Path | str | None = None,
    working_dir: Path | None = None,
) -> RunConfig:
    """Merge CLI options, environment variables, file values and defaults.

    Args:
      options: Explicit values keyed by field name; None or blank means unset.
      environ: Environment variable mapping consulted for fallbacks.
      config_path: Optional YAML run-configuration file.
      working_dir: Directory used for git-root app-name detection.

    Returns:
      The validated, immutable run configuration.

    Raises:
      ConfigValidationFailed: If a required value is missing or a value is invalid.
    """
    file_values = load_run_config_file(config_path) if config_path else {}
    values = {
        field_name: _first_value(
            _normalize(options.get(field_name), field_name),
            _normalize(environ.get(env_name), field_name),
            _normalize(file_values.get(field_name), field_name),
            FIELD_DEFAULTS.get(field_name),
        )
        for field_name, (env_name, _) in FIELD_SOURCES.items()
    }

    for field_name in REQUIRED_FIELDS:
        if values[field_name] is None:
            raise ConfigValidationFailed(f"Missing required value: {_describe(field_name)}.")

    methods = _parse_methods(values["methods"], "methods")
    exclude_methods = _parse_methods(values["exclude_methods"], "exclude_methods")
    if methods and exclude_methods:
        raise ConfigValidationFailed(
            f"{_describe('methods')} and {_describe('exclude_methods')} cannot both be set."
        )

    app_name = values["app_name"] or detect_app_name(environ, working_dir or Path.cwd())
    return RunConfig(
        auth_key=values["auth_key"],
        organization_id=values["organization_id"],
        app_name=app_name,
        environment=values["environment"],
        target_url=values["target_url"],
        data_source=_parse_enum(DataSource, values["data_source"], "data_source"),
        run_on=_parse_enum(RunLocation, values["run_on"], "run_on"),
        fail_scope=values["fail_scope"],
        fail_severity=values["fail_severity"],
        methods=methods,
        exclude_methods=exclude_methods,
        endpoint_pattern=values["endpoint_pattern"],
        exclude_endpoint_pattern=values["exclude_endpoint_pattern"],
        categories=values["categories"],
        fail_threshold=_parse_threshold(values["fail_threshold"]),
        test_users=values["test_users"],
        base_url=values["base_url"],
    )


def load_run_config_file(config_path: Path | str) -> Mapping[str, Any]:
    """Read the `run:` mapping of a YAML run-configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigValidationFailed(f"Configuration file not found: {path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigValidationFailed(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigValidationFailed("Configuration root must be a mapping.")

    section = parsed.get("run") or {}
    if not isinstance(section, Mapping):
        raise ConfigValidationFailed("Configuration section 'run' must be a mapping.")
    unknown = sorted(str(key) for key in section if key not in FIELD_SOURCES)
    if unknown:
        raise ConfigValidationFailed(f"Unknown run configuration keys: {', '.join(unknown)}")
    return section


def _first_value(*candidates: str | None) -> str | None:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _normalize(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigValidationFailed(f"{_describe(field_name)} must not be a boolean.")
    if isinstance(value, (int, str)):
        stripped = str(value).strip()
        return stripped or None
    if isinstance(value, Sequence):
        items = [str(item).strip() for item in value if str(item).strip()]
        return ",".join(items) or None
    raise ConfigValidationFailed(f"{_describe(field_name)} must be a string.")


def _parse_methods(value: str | None, field_name: str) -> str | None:
    if value is None:
        return None
    methods = [item.strip().upper() for item in value.split(",") if item.strip()]
    unknown = [method for method in methods if method not in KNOWN_METHODS]
    if unknown:
        raise ConfigValidationFailed(
            f"{_describe(field_name)} contains unsupported HTTP methods: {', '.join(unknown)}."
        )
    return ",".join(methods) or None


def _parse_enum(enum_cls, value: str | None, field_name: str):
    allowed = ", ".join(member.value for member in enum_cls)
    for member in enum_cls:
        if value is not None and value.lower() == member.value.lower():
            return member
    raise ConfigValidationFailed(
        f"{_describe(field_name)} must be one of {allowed}, got {value!r}."
    )


def _parse_threshold(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        threshold = int(value)
    except ValueError as exc:
        raise ConfigValidationFailed(
            f"{_describe('fail_threshold')} must be an integer, got {value!r}."
        ) from exc
    if threshold < 0:
        raise ConfigValidationFailed(f"{_describe('fail_threshold')} must not be negative.")
    return threshold


def _describe(field_name: str) -> str:
    env_name, option = FIELD_SOURCES[field_name]
    return f"{option} / {env_name}"
