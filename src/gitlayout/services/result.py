"""ServiceResult and ServiceError: what every LayoutService call returns.

Failures never escape the service layer as exceptions. A
:class:`~gitlayout.domain.errors.LayoutError` becomes an ``ok=False``
result whose ``error.code`` names the error kind, so the CLI (and any
other caller) branches on the code instead of parsing messages.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from gitlayout.domain.errors import LayoutError


class ServiceError(BaseModel):
    """Error payload: stable code, human message, structured detail."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_layout_error(cls, exc: LayoutError) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=exc.to_detail())


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"resolve"``, ``"work_tree"``, ``"init"`` ...).
        data: Operation payload; empty on failure.
        warnings: Non-fatal notes, printed to stderr by the CLI.
        error: Set exactly when ``ok`` is False.
        meta: Timing spans when telemetry is enabled.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )

    @classmethod
    def from_layout_error(cls, op: str, exc: LayoutError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_layout_error(exc))
