"""Unified settings: CLI flags and environment variables in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: git's own ``GIT_DIR``, ``GIT_WORK_TREE``,
               ``GIT_CEILING_DIRECTORIES``; ``GITLAYOUT_*`` for output flags
  3. Code defaults

Uses Pydantic Settings v2. The git variables bypass the ``GITLAYOUT_``
prefix through validation aliases so existing git environments just work.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from gitlayout.domain.layout import ConstructionHints


class LayoutSettings(BaseSettings):
    """Settings for one gitlayout invocation, frozen after construction.

    Attributes:
        git_dir: ``--git-dir`` or ``GIT_DIR``.
        work_tree: ``--work-tree`` or ``GIT_WORK_TREE``.
        ceiling_directories: ``GIT_CEILING_DIRECTORIES`` (``os.pathsep``-separated).
        search_from: Discovery start directory; defaults to the CWD.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GITLAYOUT_",
        "populate_by_name": True,
    }

    # --- Repository hints ---
    git_dir: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("git_dir", "GIT_DIR"),
    )
    work_tree: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("work_tree", "GIT_WORK_TREE"),
    )
    ceiling_directories: str = Field(
        default="",
        validation_alias=AliasChoices("ceiling_directories", "GIT_CEILING_DIRECTORIES"),
    )
    search_from: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and the environment; no dotenv or secrets."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(
        cls,
        *,
        git_dir: str | None = None,
        work_tree: str | None = None,
        **cli_flags: Any,
    ) -> LayoutSettings:
        """Construct settings from a CLI invocation.

        Flags that are off fall through to the environment instead of
        shadowing it; a flag can only switch a setting on.
        """
        overrides: dict[str, Any] = {k: v for k, v in cli_flags.items() if v}
        if git_dir is not None:
            overrides["git_dir"] = Path(git_dir)
        if work_tree is not None:
            overrides["work_tree"] = Path(work_tree)
        return cls(**overrides)

    @property
    def ceiling_dirs(self) -> tuple[Path, ...]:
        parts = (p for p in self.ceiling_directories.split(os.pathsep) if p.strip())
        return tuple(Path(p) for p in parts)

    def to_hints(self, *, create: bool = False) -> ConstructionHints:
        """Build construction hints from the resolved settings."""
        return ConstructionHints(
            git_dir=self.git_dir,
            work_tree=self.work_tree,
            create=create,
            search_from=self.search_from,
            ceiling_dirs=self.ceiling_dirs,
        )
