"""CLI smoke tests."""

from click.testing import CliRunner
from levo_ci_runner.cli import cli, main


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("install", "test", "audit", "version", "help"):
        assert command in result.output


def test_help_command_prints_usage(capsys) -> None:
    exit_code = main(["help"])

    assert exit_code == 0
    assert "Usage:" in capsys.readouterr().out


def test_test_command_help_lists_run_options() -> None:
    result = CliRunner().invoke(cli, ["test", "--help"])

    assert result.exit_code == 0
    assert "--exclude-endpoint-pattern" in result.output
    assert "--fail-threshold" in result.output
