"""Result types returned by every trackctl service.

A service never raises for a problem with the log: it returns a
ServiceResult with ``ok=False`` and a ServiceError whose ``code`` names
the error kind.  The CLI maps that to exit status 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from trackctl.domain.errors import TimeLogError

Op = Literal["begin", "end", "next", "fork", "wait", "total", "list", "status", "verify"]

ErrorCode = Literal[
    "STRUCTURAL_FORMAT",
    "NO_OPEN_INTERVAL",
    "IO_ERROR",
    "INVALID_TIMESTAMP",
    "NO_SIGNALS",
    "SPAWN_FAILED",
]


class ServiceError(BaseModel):
    """Why an operation failed."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: TimeLogError) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=exc.detail())


class ServiceResult(BaseModel):
    """Outcome of one operation on the log.

    ``data`` is the operation's payload on success.  ``warnings`` lists
    anomalies that were tolerated instead of failing the operation, and
    ``meta`` records which log was used and whether strict mode applied.
    """

    model_config = {"frozen": True}

    ok: bool
    op: Op
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
