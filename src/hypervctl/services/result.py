"""ServiceResult and ServiceError — the envelope the CLI consumes.

INVARIANT: Exactly one of ``data`` (when ``ok``) or ``error`` is populated.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from hypervctl.domain.errors import HypervError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is the :class:`~hypervctl.domain.errors.ErrorKind` value.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: HypervError) -> ServiceError:
        return cls(code=exc.kind.value, message=exc.message, detail=exc.detail())


class ServiceResult(BaseModel):
    """Return type of every VmService operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"list_vms"``).
        data: Operation-specific payload on success.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, exc: HypervError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
