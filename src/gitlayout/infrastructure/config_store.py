"""Repository-local config store backed by dulwich.

Wraps :class:`dulwich.config.ConfigFile` for ``<git_dir>/config``. The
parsing grammar is dulwich's; this module only maps its failures onto
:class:`InvalidConfig` and exposes the handful of keys layout resolution
reads. Writes (``set``/``save``) exist for callers preparing repositories;
the resolver never writes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dulwich.config import ConfigFile

from gitlayout.domain.errors import InvalidConfig
from gitlayout.domain.layout import ConfigOverrides
from gitlayout.domain.types import (
    BARE_KEY,
    CONFIG_FILENAME,
    CORE_SECTION,
    WORKTREE_KEY,
    BareSetting,
)

logger = logging.getLogger(__name__)

# Boolean spellings git accepts; an empty value is false.
GIT_TRUE = frozenset({"true", "yes", "on", "1"})
GIT_FALSE = frozenset({"false", "no", "off", "0", ""})


class GitConfigStore:
    """Section-keyed settings from one repository config file.

    Usage::

        store = GitConfigStore.load(git_dir)
        store.set("core", "bare", True)
        store.save()
    """

    def __init__(self, path: Path, config: ConfigFile | None = None) -> None:
        self.path = path
        self._config = config if config is not None else ConfigFile()

    @classmethod
    def load(cls, git_dir: Path) -> GitConfigStore:
        """Read ``<git_dir>/config``; a missing file yields an empty store.

        Raises:
            InvalidConfig: The file exists but cannot be read or parsed.
        """
        path = git_dir / CONFIG_FILENAME
        try:
            config = ConfigFile.from_path(os.fspath(path))
        except FileNotFoundError:
            logger.debug("No config at %s; treating all keys as unset", path)
            return cls(path)
        except OSError as exc:
            msg = f"Cannot read config {path}"
            raise InvalidConfig(msg, path=path, detail=str(exc)) from exc
        except ValueError as exc:
            msg = f"Malformed config {path}"
            raise InvalidConfig(msg, path=path, detail=str(exc)) from exc
        return cls(path, config)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, section: str, key: str) -> str | None:
        """Decoded string value, or None when the key is absent.

        Raises:
            InvalidConfig: The value is not valid UTF-8.
        """
        try:
            value = self._config.get((section,), key)
        except KeyError:
            return None
        if value is None:
            return None
        if not isinstance(value, bytes):
            return str(value)
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Undecodable value for {section}.{key} in {self.path}"
            raise InvalidConfig(msg, path=self.path, detail=str(exc)) from exc

    def get_boolean(self, section: str, key: str) -> bool | None:
        """Boolean value in any of git's spellings, or None when absent.

        Raises:
            InvalidConfig: The value is not a boolean string.
        """
        raw = self.get(section, key)
        if raw is None:
            return None
        spelled = raw.strip().lower()
        if spelled in GIT_TRUE:
            return True
        if spelled in GIT_FALSE:
            return False
        msg = f"Invalid boolean for {section}.{key} in {self.path}"
        raise InvalidConfig(msg, path=self.path, detail=f"not a valid boolean string: {raw!r}")

    def read_overrides(self) -> ConfigOverrides:
        """The ``core.bare`` / ``core.worktree`` settings that affect layout."""
        bare = BareSetting.from_optional(self.get_boolean(CORE_SECTION, BARE_KEY))
        raw_tree = self.get(CORE_SECTION, WORKTREE_KEY)
        if raw_tree is not None and not raw_tree.strip():
            msg = f"Empty {CORE_SECTION}.{WORKTREE_KEY} in {self.path}"
            raise InvalidConfig(msg, path=self.path, detail="value is empty")
        work_tree = Path(raw_tree).expanduser() if raw_tree is not None else None
        return ConfigOverrides(bare=bare, work_tree=work_tree)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, section: str, key: str, value: str | bool) -> None:
        self._config.set((section,), key, value)

    def unset(self, section: str, key: str) -> bool:
        """Remove every value of *key*; False when it was not set."""
        try:
            del self._config[(section.encode("utf-8"),)][key.encode("utf-8")]
        except KeyError:
            return False
        return True

    def save(self) -> None:
        """Write the config file, creating the control directory if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._config.write_to_path(os.fspath(self.path))
        logger.debug("Wrote config %s", self.path)


def read_overrides(git_dir: Path) -> ConfigOverrides:
    """Load ``<git_dir>/config`` fresh and return its layout overrides."""
    return GitConfigStore.load(git_dir).read_overrides()
