"""LayoutService: resolve, inspect and initialize repository layouts.

Every method returns :class:`ServiceResult`. Domain failures
(:class:`LayoutError` subclasses) become ``ok=False`` results whose
``error.code`` is the error kind, so callers never parse messages.
"""

from __future__ import annotations

import logging

from gitlayout.domain.errors import LayoutError
from gitlayout.domain.layout import ConstructionHints
from gitlayout.domain.types import BARE_KEY, CORE_SECTION, WORKTREE_KEY
from gitlayout.infrastructure.repository import (
    RepositoryHandle,
    init_repository,
    open_repository,
)
from gitlayout.services.result import ServiceResult
from gitlayout.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

INVALID_ARGUMENT = "INVALID_ARGUMENT"
CONFIG_KEY_NOT_SET = "CONFIG_KEY_NOT_SET"


class LayoutService:
    """Layout operations for one set of construction hints.

    Each call resolves afresh; nothing is cached between calls, so config
    edits made in between are always observed.
    """

    def __init__(self, hints: ConstructionHints) -> None:
        self._hints = hints

    @property
    def hints(self) -> ConstructionHints:
        return self._hints

    def _open(self) -> RepositoryHandle:
        with trace_span("resolve_layout", discovery=self._hints.needs_discovery) as span:
            handle = open_repository(self._hints)
            if span:
                span.annotate(rule=str(handle.layout.rule))
        return handle

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @traced
    def resolve(self) -> ServiceResult:
        """Resolve the hints into a layout."""
        op = "resolve"
        try:
            handle = self._open()
        except LayoutError as exc:
            return ServiceResult.from_layout_error(op, exc)
        return ServiceResult.success(op, handle.layout.to_dict())

    @traced
    def work_tree(self) -> ServiceResult:
        """Report the working tree; fails with NO_WORK_TREE when bare."""
        op = "work_tree"
        try:
            handle = self._open()
            tree = handle.get_work_tree()
        except LayoutError as exc:
            return ServiceResult.from_layout_error(op, exc)
        return ServiceResult.success(
            op, {"work_tree": str(tree), "git_dir": str(handle.get_directory())}
        )

    @traced
    def index(self) -> ServiceResult:
        """Report the index file and its entry count."""
        op = "index"
        try:
            handle = self._open()
            index_file = handle.get_index_file()
            with trace_span("read_index") as span:
                entries = len(handle.read_index())
                if span:
                    span.annotate(entries=entries)
        except LayoutError as exc:
            return ServiceResult.from_layout_error(op, exc)
        return ServiceResult.success(
            op,
            {
                "index_file": str(index_file),
                "exists": index_file.is_file(),
                "entries": entries,
            },
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def init(self, *, bare: bool | None = None) -> ServiceResult:
        """Create the repository skeleton and record ``core.bare``."""
        op = "init"
        try:
            with trace_span("init_repository"):
                handle = init_repository(self._hints, bare=bare)
        except LayoutError as exc:
            return ServiceResult.from_layout_error(op, exc)
        except ValueError as exc:
            return ServiceResult.failure(op, INVALID_ARGUMENT, str(exc))
        return ServiceResult.success(op, handle.layout.to_dict())

    @traced
    def config_get(self, section: str, key: str) -> ServiceResult:
        """Read one key from the repository config."""
        op = "config_get"
        try:
            value = self._open().config().get(section, key)
        except LayoutError as exc:
            return ServiceResult.from_layout_error(op, exc)
        if value is None:
            return ServiceResult.failure(
                op,
                CONFIG_KEY_NOT_SET,
                f"{section}.{key} is not set",
                detail={"section": section, "key": key},
            )
        return ServiceResult.success(op, {"section": section, "key": key, "value": value})

    @traced
    def config_set(self, section: str, key: str, value: str) -> ServiceResult:
        """Write one key to the repository config.

        The layout is resolved before the write; the new value only affects
        later resolutions.
        """
        op = "config_set"
        try:
            store = self._open().config()
            store.set(section, key, value)
            store.save()
        except LayoutError as exc:
            return ServiceResult.from_layout_error(op, exc)

        warnings: list[str] = []
        if section == CORE_SECTION and key in (BARE_KEY, WORKTREE_KEY):
            warnings.append(f"{section}.{key} changes how this repository's layout resolves")
        logger.debug("Set %s.%s in %s", section, key, store.path)
        return ServiceResult.success(
            op,
            {"section": section, "key": key, "value": value, "path": str(store.path)},
            warnings=warnings,
        )
