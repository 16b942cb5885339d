"""Tests for --examples flag on CLI commands.

Parametrized to cover all commands that define examples text.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from gitlayout.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["gitlayout -C"]),
    (["resolve", "--examples"], ["gitlayout resolve", "--work-tree"]),
    (["worktree", "--examples"], ["gitlayout worktree"]),
    (["index", "--examples"], ["gitlayout --json index"]),
    (["init", "--examples"], ["init --bare"]),
    (["config", "--examples"], ["gitlayout config get core bare"]),
    (["config", "get", "--examples"], ["config get core worktree"]),
    (["config", "set", "--examples"], ["config set core bare true"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples") or "root"


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


@pytest.mark.parametrize("args", [["resolve", "--help"], ["config", "set", "--help"]])
def test_examples_listed_in_help(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "--examples" in result.output


def test_examples_does_not_touch_repository(cli_runner: CliRunner, tmp_path) -> None:
    result = cli_runner.invoke(cli, ["--git-dir", str(tmp_path / "missing"), "init", "--examples"])
    assert result.exit_code == 0
    assert not (tmp_path / "missing").exists()
