"""Path canonicalization and control-directory discovery.

Walk-up finder locates a ``.git`` directory (or a bare control directory)
from a start directory, the same way git does when no ``--git-dir`` is given.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from gitlayout.domain.types import DOT_GIT, HEAD_FILENAME, OBJECTS_DIRNAME, REFS_DIRNAME

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def absolute(path: Path) -> Path:
    """Make *path* absolute and normalized without resolving symlinks.

    The base name survives, which matters for the ``.git`` naming rule.
    """
    return Path(os.path.abspath(path.expanduser()))


def canonicalize(path: Path) -> Path:
    """Absolute, symlink-resolved form of *path* (need not exist)."""
    return path.expanduser().resolve()


def ensure_directory(path: Path) -> Path:
    """Create *path* and any missing parents; return its canonical form."""
    path.mkdir(parents=True, exist_ok=True)
    return canonicalize(path)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def is_git_directory(path: Path) -> bool:
    """Whether *path* looks like a control directory (HEAD, objects/, refs/)."""
    return (
        (path / HEAD_FILENAME).is_file()
        and (path / OBJECTS_DIRNAME).is_dir()
        and (path / REFS_DIRNAME).is_dir()
    )


def find_git_dir(
    start: Path | None = None,
    ceilings: Iterable[Path] = (),
) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a control directory.

    At each level, ``<dir>/.git`` wins over ``<dir>`` itself being a bare
    control directory. The walk never enters a directory listed in
    *ceilings*; the start directory is always checked.

    Returns the control directory path, or None if not found.
    """
    stop_at = {canonicalize(c) for c in ceilings}
    current = canonicalize(start or Path.cwd())
    while True:
        candidate = current / DOT_GIT
        if candidate.is_dir():
            logger.debug("Found %s at %s", DOT_GIT, candidate)
            return candidate
        if is_git_directory(current):
            logger.debug("Found bare control directory at %s", current)
            return current
        parent = current.parent
        if parent == current or parent in stop_at:
            break
        current = parent
    return None
