"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

TEST_DEFAULT_METHODS = "GET,POST"
AUDIT_METHODS = "GET,POST,PUT,PATCH,DELETE"
AUDIT_FAIL_SCOPE = "none"
AUDIT_FAIL_SEVERITY = "none"


class DataSource(str, Enum):
    """Where the Levo CLI takes request data from."""

    TEST_USER_DATA = "TestUserData"
    TRACES = "Traces"


class RunLocation(str, Enum):
    """Where the Levo test run executes."""

    CLOUD = "cloud"
    ON_PREM = "on-prem"


@dataclass(frozen=True)
class RunConfig:  # pylint: disable=too-many-instance-attributes
    """Effective configuration for one `remote-test-run` invocation."""

    auth_key: str
    organization_id: str
    app_name: str
    environment: str
    target_url: str
    data_source: DataSource
    run_on: RunLocation
    fail_scope: str
    fail_severity: str
    methods: str | None = None
    exclude_methods: str | None = None
    endpoint_pattern: str | None = None
    exclude_endpoint_pattern: str | None = None
    categories: str | None = None
    fail_threshold: int | None = None
    test_users: str | None = None
    base_url: str | None = None

    def __repr__(self) -> str:
        return (
            f"RunConfig(app_name={self.app_name!r}, environment={self.environment!r}, "
            f"target_url={self.target_url!r}, data_source={self.data_source.value!r}, "
            f"run_on={self.run_on.value!r}, auth_key='***')"
        )


def apply_test_defaults(config: RunConfig) -> RunConfig:
    """Default the method filter to GET,POST when neither filter is set."""
    if config.methods or config.exclude_methods:
        return config
    return replace(config, methods=TEST_DEFAULT_METHODS)


def apply_audit_overrides(config: RunConfig) -> RunConfig:
    """Widen the run to every method and disable failure gating."""
    return replace(
        config,
        methods=AUDIT_METHODS,
        exclude_methods=None,
        fail_scope=AUDIT_FAIL_SCOPE,
        fail_severity=AUDIT_FAIL_SEVERITY,
    )
