"""Tests for layout models and the bare/work-tree invariant."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gitlayout.domain.layout import ConfigOverrides, ConstructionHints, ResolvedLayout
from gitlayout.domain.types import BareSetting, ResolutionRule


class TestResolvedLayout:
    def test_non_bare(self) -> None:
        layout = ResolvedLayout(
            git_dir=Path("/w/.git"),
            work_tree=Path("/w"),
            bare=False,
            rule=ResolutionRule.NAMING_DOT_GIT,
        )
        assert layout.work_tree == Path("/w")

    def test_bare_with_work_tree_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Inconsistent layout"):
            ResolvedLayout(
                git_dir=Path("/w/.git"),
                work_tree=Path("/w"),
                bare=True,
                rule=ResolutionRule.NAMING_DOT_GIT,
            )

    def test_non_bare_without_work_tree_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ResolvedLayout(git_dir=Path("/r"), bare=False, rule=ResolutionRule.NAMING_BARE)

    def test_git_dir_required(self) -> None:
        with pytest.raises(ValidationError):
            ResolvedLayout(bare=True, rule=ResolutionRule.NAMING_BARE)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        layout = ResolvedLayout(git_dir=Path("/r"), bare=True, rule=ResolutionRule.NAMING_BARE)
        with pytest.raises(ValidationError):
            layout.bare = False  # type: ignore[misc]

    def test_same_location_ignores_rule(self) -> None:
        a = ResolvedLayout(git_dir=Path("/r"), bare=True, rule=ResolutionRule.NAMING_BARE)
        b = ResolvedLayout(git_dir=Path("/r"), bare=True, rule=ResolutionRule.CONFIG_BARE_TRUE)
        c = ResolvedLayout(git_dir=Path("/other"), bare=True, rule=ResolutionRule.NAMING_BARE)
        assert a.same_location(b)
        assert not a.same_location(c)

    def test_to_dict(self) -> None:
        layout = ResolvedLayout(git_dir=Path("/r"), bare=True, rule=ResolutionRule.NAMING_BARE)
        assert layout.to_dict() == {
            "git_dir": "/r",
            "work_tree": None,
            "bare": True,
            "rule": "naming-bare",
        }


class TestConstructionHints:
    def test_defaults_need_discovery(self) -> None:
        hints = ConstructionHints()
        assert hints.needs_discovery
        assert hints.create is False
        assert hints.ceiling_dirs == ()

    def test_any_path_skips_discovery(self) -> None:
        assert not ConstructionHints(git_dir=Path("/r")).needs_discovery
        assert not ConstructionHints(work_tree=Path("/w")).needs_discovery


class TestBareSetting:
    def test_from_optional(self) -> None:
        assert BareSetting.from_optional(None) is BareSetting.UNSET
        assert BareSetting.from_optional(True) is BareSetting.TRUE
        assert BareSetting.from_optional(False) is BareSetting.FALSE

    def test_overrides_default_is_unset(self) -> None:
        overrides = ConfigOverrides()
        assert overrides.bare is BareSetting.UNSET
        assert overrides.work_tree is None
