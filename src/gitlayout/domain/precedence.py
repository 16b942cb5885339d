"""Precedence table for choosing a repository layout.

Pure decision logic; the caller supplies absolute (not yet canonical) paths
and a loader for config overrides. Rows are evaluated top to bottom and the
first match wins:

  explicit git dir only   -> config overrides, then naming convention
  explicit work tree only -> ``<work_tree>/.git``, never bare
  both                    -> taken as given, never bare

Discovery (neither hint) is the caller's job: a discovered control directory
is fed back in as an explicit git dir.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from gitlayout.domain.layout import ConfigOverrides
from gitlayout.domain.types import DOT_GIT, BareSetting, ResolutionRule

OverridesLoader = Callable[[Path], ConfigOverrides]


@dataclass(frozen=True)
class LayoutChoice:
    """Uncanonicalized outcome of the precedence table."""

    git_dir: Path
    work_tree: Path | None
    rule: ResolutionRule

    @property
    def bare(self) -> bool:
        return self.work_tree is None


def choose_layout(
    git_dir: Path | None,
    work_tree: Path | None,
    load_overrides: OverridesLoader,
) -> LayoutChoice:
    """Apply the precedence table to explicit hints.

    *load_overrides* is only called when the layout depends on config,
    i.e. when a git dir is given without a work tree.

    Raises:
        ValueError: If neither *git_dir* nor *work_tree* is given.
    """
    if git_dir is not None and work_tree is None:
        return choose_from_git_dir(git_dir, load_overrides(git_dir))
    if work_tree is not None and git_dir is None:
        return LayoutChoice(
            git_dir=work_tree / DOT_GIT,
            work_tree=work_tree,
            rule=ResolutionRule.EXPLICIT_WORK_TREE,
        )
    if git_dir is not None and work_tree is not None:
        return LayoutChoice(git_dir=git_dir, work_tree=work_tree, rule=ResolutionRule.EXPLICIT_BOTH)
    msg = "choose_layout needs a git dir or a work tree; discover one first"
    raise ValueError(msg)


def choose_from_git_dir(git_dir: Path, overrides: ConfigOverrides) -> LayoutChoice:
    """Sub-rules for an explicit control directory.

    1. ``core.worktree`` wins over everything (relative to git_dir's parent).
    2. ``core.bare = true`` makes it bare.
    3. ``core.bare = false`` puts the work tree at git_dir's parent.
    4. Unset: a directory named ``.git`` is non-bare, anything else is bare.
    """
    if overrides.work_tree is not None:
        tree = overrides.work_tree
        if not tree.is_absolute():
            tree = git_dir.parent / tree
        return LayoutChoice(git_dir=git_dir, work_tree=tree, rule=ResolutionRule.CONFIG_WORKTREE)

    if overrides.bare is BareSetting.TRUE:
        return LayoutChoice(git_dir=git_dir, work_tree=None, rule=ResolutionRule.CONFIG_BARE_TRUE)
    if overrides.bare is BareSetting.FALSE:
        return LayoutChoice(
            git_dir=git_dir,
            work_tree=git_dir.parent,
            rule=ResolutionRule.CONFIG_BARE_FALSE,
        )

    if git_dir.name == DOT_GIT:
        return LayoutChoice(
            git_dir=git_dir,
            work_tree=git_dir.parent,
            rule=ResolutionRule.NAMING_DOT_GIT,
        )
    return LayoutChoice(git_dir=git_dir, work_tree=None, rule=ResolutionRule.NAMING_BARE)
