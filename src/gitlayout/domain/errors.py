"""Error taxonomy for layout resolution and repository queries.

Every error carries a stable ``code`` so callers branch on the kind of
failure rather than on message text. None of these are transient; nothing
in gitlayout retries them.
"""

from __future__ import annotations

from pathlib import Path


class LayoutError(Exception):
    """Base class for all gitlayout failures."""

    code = "LAYOUT_ERROR"

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def to_detail(self) -> dict[str, str]:
        """Structured payload for ``ServiceError.detail``."""
        detail: dict[str, str] = {}
        if self.path is not None:
            detail["path"] = str(self.path)
        return detail


class RepositoryNotFound(LayoutError):
    """The required control directory does not exist."""

    code = "REPOSITORY_NOT_FOUND"


class InvalidConfig(LayoutError):
    """The repository config is malformed or unreadable.

    ``detail`` holds the underlying parse/read message verbatim.
    """

    code = "INVALID_CONFIG"

    def __init__(self, message: str, *, path: Path | None = None, detail: str = "") -> None:
        super().__init__(message, path=path)
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def to_detail(self) -> dict[str, str]:
        detail = super().to_detail()
        if self.detail:
            detail["reason"] = self.detail
        return detail


class NoWorkTree(LayoutError):
    """A working-tree query was made on a bare repository."""

    code = "NO_WORK_TREE"
