"""Shared pytest fixtures and test helpers for gitlayout tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from gitlayout.infrastructure.config_store import GitConfigStore
from gitlayout.services.telemetry import _current_span, disable_telemetry

GIT_ENV_VARS = ("GIT_DIR", "GIT_WORK_TREE", "GIT_CEILING_DIRECTORIES")


@pytest.fixture(autouse=True)
def _clean_git_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own git environment out of every test."""
    for name in GIT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Telemetry context vars must not leak between tests."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_dir(tmp_path: Path) -> Callable[..., Path]:
    """Create ``tmp_path/<parts...>`` (with parents) and return it."""

    def _make(*parts: str) -> Path:
        path = tmp_path.joinpath(*parts)
        path.mkdir(parents=True, exist_ok=True)
        return path

    return _make


@pytest.fixture
def set_bare() -> Callable[[Path, bool], None]:
    """Write ``core.bare`` into ``<git_dir>/config``."""

    def _set(git_dir: Path, bare: bool) -> None:
        store = GitConfigStore.load(git_dir)
        store.set("core", "bare", bare)
        store.save()

    return _set


@pytest.fixture
def set_work_tree() -> Callable[[Path, str | Path], None]:
    """Write ``core.worktree`` into ``<git_dir>/config``."""

    def _set(git_dir: Path, work_tree: str | Path) -> None:
        store = GitConfigStore.load(git_dir)
        store.set("core", "worktree", str(work_tree))
        store.save()

    return _set


@pytest.fixture
def write_config() -> Callable[[Path, str], Path]:
    """Write raw text as ``<git_dir>/config`` (for malformed-config tests)."""

    def _write(git_dir: Path, text: str) -> Path:
        path = git_dir / "config"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def bare_skeleton(make_dir: Callable[..., Path]) -> Callable[..., Path]:
    """Create a directory that discovery recognizes as a bare control dir."""

    def _make(*parts: str) -> Path:
        git_dir = make_dir(*parts)
        (git_dir / "objects").mkdir()
        (git_dir / "refs").mkdir()
        (git_dir / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
        return git_dir

    return _make
