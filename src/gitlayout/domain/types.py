"""Layout constants and classification enums.

Names of the well-known files inside a control directory, the tri-state
``core.bare`` setting, and the precedence rules a layout can be produced by.
"""

from __future__ import annotations

from enum import StrEnum

# Conventional name of a control directory nested inside its working tree.
DOT_GIT = ".git"

# Files and directories inside a control directory.
CONFIG_FILENAME = "config"
INDEX_FILENAME = "index"
HEAD_FILENAME = "HEAD"
OBJECTS_DIRNAME = "objects"
REFS_DIRNAME = "refs"

# Repository-local config keys consulted during resolution.
CORE_SECTION = "core"
BARE_KEY = "bare"
WORKTREE_KEY = "worktree"


class BareSetting(StrEnum):
    """Tri-state value of ``core.bare``.

    ``UNSET`` is distinct from ``FALSE``: only an unset value lets the
    directory naming convention decide bareness.
    """

    UNSET = "unset"
    TRUE = "true"
    FALSE = "false"

    @classmethod
    def from_optional(cls, value: bool | None) -> BareSetting:
        if value is None:
            return cls.UNSET
        return cls.TRUE if value else cls.FALSE


class ResolutionRule(StrEnum):
    """Which row of the precedence table produced a layout."""

    CONFIG_WORKTREE = "config-worktree"
    CONFIG_BARE_TRUE = "config-bare-true"
    CONFIG_BARE_FALSE = "config-bare-false"
    NAMING_DOT_GIT = "naming-dot-git"
    NAMING_BARE = "naming-bare"
    EXPLICIT_WORK_TREE = "explicit-work-tree"
    EXPLICIT_BOTH = "explicit-both"
