"""Tests for the root gitlayout CLI."""

from click.testing import CliRunner

from gitlayout import __version__
from gitlayout.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "gitlayout" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


def test_json_flag_accepted(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli, ["--json", "--version"]).exit_code == 0


def test_quiet_flag_accepted(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli, ["-q", "--version"]).exit_code == 0


def test_verbose_flag_accepted(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli, ["-v", "--version"]).exit_code == 0


def test_log_json_flag_accepted(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli, ["--log-json", "--version"]).exit_code == 0


def test_unknown_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["frobnicate"])
    assert result.exit_code == 2
