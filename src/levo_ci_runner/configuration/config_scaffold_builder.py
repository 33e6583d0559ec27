"""Run-configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "levo-run.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Run configuration template for levo-ci-runner.
# Command line options and LEVOAI_* environment variables override these values.
# Keep secrets (key, organization) in LEVOAI_AUTH_KEY / LEVOAI_ORG_ID instead of this file.

run:
  target_url: "<REQUIRED>"
  # app_name defaults to the CI repository name or the git root directory name.
  # app_name: "<OPTIONAL>"
  environment: "staging"
  # data_source is TestUserData or Traces.
  data_source: "Traces"
  # run_on is cloud or on-prem.
  run_on: "cloud"
  # Set at most one of methods / exclude_methods.
  # methods: "GET,POST"
  # exclude_methods: "<OPTIONAL>"
  # endpoint_pattern: "<OPTIONAL>"
  # exclude_endpoint_pattern: "<OPTIONAL>"
  # categories: "<OPTIONAL>"
  fail_scope: "all"
  fail_severity: "high"
  # fail_threshold: "<OPTIONAL>"
  # test_users is only forwarded when data_source is TestUserData.
  # test_users: "<OPTIONAL>"
  # base_url: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML run configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder run configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination}")
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
