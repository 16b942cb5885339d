"""Timing spans for service calls, shown under ``--verbose``.

Disabled by default: ``@traced`` and :func:`trace_span` cost one
ContextVar lookup and do nothing else. Once enabled, every traced
service call records a tree of named spans (``resolve_layout``,
``read_index`` ...) and attaches it as ``meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from gitlayout.services.result import ServiceResult

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

log = structlog.get_logger("gitlayout.telemetry")


@dataclass
class Span:
    """One timed step; children are the steps it ran."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def close(self) -> None:
        if self.finished is None:
            self.finished = time.perf_counter()

    def annotate(self, **values: Any) -> None:
        self.annotations.update(values)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def trace_span(name: str, **annotations: Any) -> Iterator[Span | None]:
    """Time a step inside a traced call.

    Yields None when telemetry is off or no traced call is running, so
    callers guard annotations with ``if span:``.
    """
    parent = _current_span.get() if _verbose_enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name, annotations=dict(annotations))
    parent.children.append(span)
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.close()
        _current_span.reset(token)


def _with_telemetry(result: ServiceResult, span: Span) -> ServiceResult:
    meta = dict(result.meta or {})
    meta["telemetry"] = span.to_dict()
    return result.model_copy(update={"meta": meta})


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Wrap a service method in a root span named after its qualname."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _current_span.set(span)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = not isinstance(result, ServiceResult) or result.ok
        finally:
            span.close()
            _current_span.reset(token)
            log.debug(
                "span.finished",
                span=span.name,
                duration_ms=round(span.duration_ms, 2),
                ok=ok,
                steps=[child.name for child in span.children],
            )

        if isinstance(result, ServiceResult):
            return _with_telemetry(result, span)  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)

