"""Tests for the resolve command."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from gitlayout.cli import cli

MakeDir = Callable[..., Path]


class TestResolve:
    def test_dot_git_layout(self, cli_runner: CliRunner, make_dir: MakeDir) -> None:
        git_dir = make_dir("project", ".git")
        result = cli_runner.invoke(cli, ["--git-dir", str(git_dir), "resolve"])
        assert result.exit_code == 0
        assert "OK" in result.stdout
        assert str(git_dir.resolve()) in result.stdout
        assert "false" in result.stdout

    def test_json_output(self, cli_runner: CliRunner, make_dir: MakeDir) -> None:
        git_dir = make_dir("srv", "project.git")
        result = cli_runner.invoke(cli, ["--json", "--git-dir", str(git_dir), "resolve"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["op"] == "resolve"
        assert payload["data"]["bare"] is True
        assert payload["data"]["work_tree"] is None
        assert payload["data"]["rule"] == "naming-bare"

    def test_quiet_prints_git_dir(self, cli_runner: CliRunner, make_dir: MakeDir) -> None:
        git_dir = make_dir("srv", "project.git")
        result = cli_runner.invoke(cli, ["-q", "--git-dir", str(git_dir), "resolve"])
        assert result.exit_code == 0
        assert result.stdout.strip() == str(git_dir.resolve())

    def test_work_tree_only(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "--work-tree", str(tmp_path), "resolve"])
        payload = json.loads(result.stdout)
        assert payload["data"]["git_dir"] == str(tmp_path.resolve() / ".git")
        assert payload["data"]["bare"] is False

    def test_git_dir_from_environment(
        self,
        cli_runner: CliRunner,
        make_dir: MakeDir,
        set_bare: Callable[[Path, bool], None],
    ) -> None:
        git_dir = make_dir("proj", "meta")
        set_bare(git_dir, False)
        result = cli_runner.invoke(cli, ["--json", "resolve"], env={"GIT_DIR": str(git_dir)})
        payload = json.loads(result.stdout)
        assert payload["data"]["bare"] is False
        assert payload["data"]["work_tree"] == str(git_dir.parent.resolve())

    def test_discovery_from_cwd(
        self,
        cli_runner: CliRunner,
        make_dir: MakeDir,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        git_dir = make_dir("checkout", ".git")
        for sub in ("objects", "refs"):
            (git_dir / sub).mkdir()
        (git_dir / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
        monkeypatch.chdir(make_dir("checkout", "src", "pkg"))
        result = cli_runner.invoke(cli, ["-q", "resolve"])
        assert result.exit_code == 0
        assert result.stdout.strip() == str(git_dir.resolve())

    def test_missing_repository(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--git-dir", str(tmp_path / "nope"), "resolve"])
        assert result.exit_code == 1
        assert "REPOSITORY_NOT_FOUND" in result.stderr
        assert result.stdout == ""

    def test_missing_repository_json_on_stderr(
        self, cli_runner: CliRunner, tmp_path: Path
    ) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "--git-dir", str(tmp_path / "nope"), "resolve"]
        )
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "REPOSITORY_NOT_FOUND"

    def test_verbose_shows_rule_and_telemetry(
        self, cli_runner: CliRunner, make_dir: MakeDir
    ) -> None:
        git_dir = make_dir("srv", "project.git")
        result = cli_runner.invoke(cli, ["-v", "--git-dir", str(git_dir), "resolve"])
        assert result.exit_code == 0
        assert "naming-bare" in result.stdout
        assert "LayoutService.resolve" in result.stdout

    def test_search_from_option(
        self, cli_runner: CliRunner, bare_skeleton: Callable[..., Path], make_dir: MakeDir
    ) -> None:
        git_dir = bare_skeleton("srv", "project.git")
        nested = make_dir("srv", "project.git", "refs", "heads")
        result = cli_runner.invoke(cli, ["--json", "-C", str(nested), "resolve"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["data"]["git_dir"] == str(git_dir.resolve())
        assert payload["data"]["bare"] is True

    def test_search_from_must_exist(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["-C", str(tmp_path / "nope"), "resolve"])
        assert result.exit_code == 2

    def test_ceiling_stops_discovery(
        self, cli_runner: CliRunner, bare_skeleton: Callable[..., Path], make_dir: MakeDir
    ) -> None:
        bare_skeleton("outer")
        inner = make_dir("outer", "fenced", "deep")
        result = cli_runner.invoke(
            cli,
            ["-C", str(inner), "resolve"],
            env={"GIT_CEILING_DIRECTORIES": str(inner.parent.parent)},
        )
        assert result.exit_code == 1
        assert "REPOSITORY_NOT_FOUND" in result.stderr
