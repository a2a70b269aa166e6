"""CLI smoke tests."""

from click.testing import CliRunner
from unified_test_orchestrator.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("run", "generate-tests", "list-modules", "generate-config"):
        assert command in result.output


def test_run_help_lists_suite_choices() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "--help"])

    assert result.exit_code == 0
    assert "NonInteractive" in result.output
    assert "--parallel" in result.output
