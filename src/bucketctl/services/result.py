"""The value every handler returns.

Classified failures (anything in :mod:`bucketctl.domain.errors`) come
back as ``ok=False`` with a :class:`ServiceError`; storage faults are
raised, never folded into a result. Transports render this type and
decide exit codes or status codes from it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bucketctl.domain.errors import BucketctlError


class ServiceError(BaseModel):
    """Why an operation failed: stable ``code``, readable ``message``, ``detail``."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BucketctlError) -> ServiceError:
        # The taxonomy's status hint rides along in detail["status"].
        return cls(code=exc.code, message=exc.message, detail={**exc.detail, "status": exc.status})


class ServiceResult(BaseModel):
    """Outcome of one handled message.

    Attributes:
        ok: False only for classified failures.
        op: Handler name, e.g. ``"update_item"``.
        data: Validated payload (see :mod:`bucketctl.services.contracts`).
        warnings: Non-fatal notes for the caller.
        error: Set exactly when ``ok`` is False.
        meta: Extra information such as telemetry spans.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: BucketctlError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
