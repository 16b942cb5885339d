"""Layout models: construction hints, config overrides, resolved layout.

All three are frozen. Hints are the caller's input, overrides are what the
repository config says, and a resolved layout is the consistent result.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator

from gitlayout.domain.types import BareSetting, ResolutionRule


class ConstructionHints(BaseModel):
    """Caller-supplied hints for locating a repository.

    Attributes:
        git_dir: Explicit control directory, if the caller knows it.
        work_tree: Explicit working tree, if the caller knows it.
        create: The caller is about to create the repository, so a missing
            control directory is not an error.
        search_from: Start directory for discovery when neither path is
            given. Defaults to the current working directory.
        ceiling_dirs: Discovery never walks above these directories.
    """

    model_config = {"frozen": True}

    git_dir: Path | None = None
    work_tree: Path | None = None
    create: bool = False
    search_from: Path | None = None
    ceiling_dirs: tuple[Path, ...] = ()

    @property
    def needs_discovery(self) -> bool:
        return self.git_dir is None and self.work_tree is None


class ConfigOverrides(BaseModel):
    """Values from ``<git_dir>/config`` that can override the naming convention."""

    model_config = {"frozen": True}

    bare: BareSetting = BareSetting.UNSET
    work_tree: Path | None = None


class ResolvedLayout(BaseModel):
    """A canonical, internally consistent repository layout.

    INVARIANT: ``bare`` is True exactly when ``work_tree`` is None.
    """

    model_config = {"frozen": True}

    git_dir: Path
    work_tree: Path | None = None
    bare: bool
    rule: ResolutionRule

    @model_validator(mode="after")
    def _check_bare_matches_work_tree(self) -> ResolvedLayout:
        if self.bare != (self.work_tree is None):
            msg = (
                f"Inconsistent layout: bare={self.bare} "
                f"but work_tree={self.work_tree!s}"
            )
            raise ValueError(msg)
        return self

    def same_location(self, other: ResolvedLayout) -> bool:
        """Compare by canonical path strings, ignoring the producing rule."""
        return (
            str(self.git_dir) == str(other.git_dir)
            and str(self.work_tree) == str(other.work_tree)
            and self.bare == other.bare
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "git_dir": str(self.git_dir),
            "work_tree": str(self.work_tree) if self.work_tree is not None else None,
            "bare": self.bare,
            "rule": str(self.rule),
        }
