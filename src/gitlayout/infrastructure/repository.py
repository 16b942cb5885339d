"""Layout resolution and the repository handle.

:func:`resolve_layout` turns :class:`ConstructionHints` into a canonical
:class:`ResolvedLayout` by combining the precedence table in
:mod:`gitlayout.domain.precedence` with filesystem and config lookups.
:class:`RepositoryHandle` wraps one layout and answers queries about it.

INVARIANT: Resolution never writes. Only :func:`init_repository` and
:meth:`GitConfigStore.save` touch the disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dulwich.index import Index

from gitlayout.domain.errors import NoWorkTree, RepositoryNotFound
from gitlayout.domain.layout import ConstructionHints, ResolvedLayout
from gitlayout.domain.precedence import LayoutChoice, choose_layout
from gitlayout.domain.types import (
    BARE_KEY,
    CORE_SECTION,
    DOT_GIT,
    HEAD_FILENAME,
    INDEX_FILENAME,
    OBJECTS_DIRNAME,
    REFS_DIRNAME,
    WORKTREE_KEY,
    ResolutionRule,
)
from gitlayout.infrastructure.config_store import GitConfigStore, read_overrides
from gitlayout.infrastructure.filesystem import (
    absolute,
    canonicalize,
    ensure_directory,
    find_git_dir,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

DEFAULT_HEAD = "ref: refs/heads/main\n"


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_layout(hints: ConstructionHints) -> ResolvedLayout:
    """Resolve *hints* into a canonical layout.

    Raises:
        RepositoryNotFound: No control directory was found by discovery, or
            an explicit/discovered one does not exist and ``hints.create``
            is False.
        InvalidConfig: The control directory's config could not be read.
    """
    git_dir = absolute(hints.git_dir) if hints.git_dir is not None else None
    work_tree = absolute(hints.work_tree) if hints.work_tree is not None else None

    if hints.needs_discovery:
        git_dir = find_git_dir(hints.search_from, hints.ceiling_dirs)
        if git_dir is None:
            start = hints.search_from or Path.cwd()
            msg = f"No git repository found in {start} or any parent directory"
            raise RepositoryNotFound(msg, path=start)
        logger.debug("Discovered control directory %s", git_dir)

    if work_tree is None and git_dir is not None:
        _require_git_dir(git_dir, create=hints.create)

    choice = choose_layout(git_dir, work_tree, read_overrides)
    layout = _canonical(choice)
    logger.debug(
        "Resolved layout git_dir=%s work_tree=%s rule=%s",
        layout.git_dir,
        layout.work_tree,
        layout.rule,
    )
    return layout


def _require_git_dir(git_dir: Path, *, create: bool) -> None:
    if git_dir.is_dir() or create:
        return
    msg = f"Repository not found: {git_dir}"
    raise RepositoryNotFound(msg, path=git_dir)


def _canonical(choice: LayoutChoice) -> ResolvedLayout:
    work_tree = canonicalize(choice.work_tree) if choice.work_tree is not None else None
    return ResolvedLayout(
        git_dir=canonicalize(choice.git_dir),
        work_tree=work_tree,
        bare=work_tree is None,
        rule=choice.rule,
    )


# ---------------------------------------------------------------------------
# RepositoryHandle
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RepositoryHandle:
    """Read-only view of a resolved layout.

    Bare and non-bare handles are the same type; every working-tree query
    checks ``layout.bare`` and raises :class:`NoWorkTree` before touching
    any storage.
    """

    layout: ResolvedLayout

    def is_bare(self) -> bool:
        return self.layout.bare

    @property
    def directory(self) -> Path:
        return self.layout.git_dir

    def get_directory(self) -> Path:
        return self.layout.git_dir

    def get_work_tree(self) -> Path:
        """The working tree root.

        Raises:
            NoWorkTree: The repository is bare.
        """
        if self.layout.work_tree is None:
            msg = f"Bare repository has no work tree: {self.layout.git_dir}"
            raise NoWorkTree(msg, path=self.layout.git_dir)
        return self.layout.work_tree

    def get_index_file(self) -> Path:
        """Path of the staging index, ``<git_dir>/index``.

        Raises:
            NoWorkTree: The repository is bare.
        """
        self.get_work_tree()
        return self.layout.git_dir / INDEX_FILENAME

    def read_index(self) -> Index:
        """Load the staging index. A missing index file reads as empty.

        Raises:
            NoWorkTree: The repository is bare.
        """
        path = self.get_index_file()
        return Index(str(path), read=path.is_file())

    def config(self) -> GitConfigStore:
        """A freshly loaded config store for this control directory."""
        return GitConfigStore.load(self.layout.git_dir)


def open_repository(hints: ConstructionHints) -> RepositoryHandle:
    """Resolve *hints* and wrap the layout in a handle."""
    return RepositoryHandle(resolve_layout(hints))


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------


def init_repository(hints: ConstructionHints, *, bare: bool | None = None) -> RepositoryHandle:
    """Create the directories and config for the layout *hints* describe.

    With no path hints, initializes ``<search_from>/.git`` (or
    ``<search_from>`` itself when *bare*). An explicit *bare* overrides
    the naming convention and is recorded as ``core.bare`` so later
    resolutions agree. ``core.worktree`` is written only for a work tree
    other than the control directory's parent, and removed otherwise.

    Raises:
        ValueError: *bare* is True but a work tree is given explicitly or
            configured through ``core.worktree``.
        InvalidConfig: An existing config in the control directory is broken.
    """
    if bare and hints.work_tree is not None:
        msg = "A repository with an explicit work tree cannot be bare"
        raise ValueError(msg)

    if hints.needs_discovery:
        base = hints.search_from or Path.cwd()
        hints = hints.model_copy(update={"git_dir": base if bare else base / DOT_GIT})
    layout = resolve_layout(hints.model_copy(update={"create": True}))

    if bare and layout.rule is ResolutionRule.CONFIG_WORKTREE:
        msg = f"{CORE_SECTION}.{WORKTREE_KEY} is set in {layout.git_dir}; cannot initialize as bare"
        raise ValueError(msg)
    if bare is not None and hints.work_tree is None and bare != layout.bare:
        layout = ResolvedLayout(
            git_dir=layout.git_dir,
            work_tree=None if bare else layout.git_dir.parent,
            bare=bare,
            rule=ResolutionRule.CONFIG_BARE_TRUE if bare else ResolutionRule.CONFIG_BARE_FALSE,
        )

    for directory in _skeleton_dirs(layout.git_dir):
        ensure_directory(directory)
    head = layout.git_dir / HEAD_FILENAME
    if not head.exists():
        head.write_text(DEFAULT_HEAD, encoding="utf-8")

    store = GitConfigStore.load(layout.git_dir)
    store.set(CORE_SECTION, BARE_KEY, layout.bare)
    if layout.work_tree is not None:
        ensure_directory(layout.work_tree)
    if layout.work_tree is None or layout.work_tree == layout.git_dir.parent:
        if store.unset(CORE_SECTION, WORKTREE_KEY):
            logger.debug("Dropped stale %s.%s from %s", CORE_SECTION, WORKTREE_KEY, store.path)
    else:
        store.set(CORE_SECTION, WORKTREE_KEY, str(layout.work_tree))
    store.save()

    logger.info("Initialized %s repository at %s", "bare" if layout.bare else "non-bare", layout.git_dir)
    return RepositoryHandle(layout)


def _skeleton_dirs(git_dir: Path) -> Iterator[Path]:
    yield git_dir
    yield git_dir / OBJECTS_DIRNAME
    yield git_dir / REFS_DIRNAME / "heads"
    yield git_dir / REFS_DIRNAME / "tags"
