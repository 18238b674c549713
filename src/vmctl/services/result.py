"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Service methods return ServiceResult instead of raising
:class:`~vmctl.errors.VmctlError`. OS errors still propagate.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from vmctl.errors import VmctlError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: VmctlError) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=exc.detail)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"status"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, exc: VmctlError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
