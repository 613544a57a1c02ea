"""Domain contracts for guarded operation status, errors and history."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from packages.ledger_shared.errors import ErrorCategory, ErrorDetail


class OperationStatus(str, Enum):
    """Lifecycle states of one guarded operation."""

    IDLE = "idle"
    VALIDATING = "validating"
    UNAUTHORIZED = "unauthorized"
    CHECKING = "checking"
    AWAITING_USER_CONFIRMATION = "awaiting_user_confirmation"
    PENDING = "pending"
    CONFIRMING = "confirming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset(
    {OperationStatus.SUCCEEDED, OperationStatus.FAILED, OperationStatus.UNAUTHORIZED}
)


class OperationErrorKind(str, Enum):
    """Distinguishable reasons an operation did not succeed."""

    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    SYSTEM_PAUSED = "system_paused"
    SUBMISSION = "submission"
    EXECUTION = "execution"
    CHECK_FAILED = "check_failed"
    TIMEOUT = "timeout"


class OperationError(BaseModel):
    """Error attached to a ``FAILED`` or ``UNAUTHORIZED`` operation.

    ``kind`` says which stage blocked the operation and ``detail`` carries the
    shared error contract. ``missing_capability`` and ``paused`` are set for
    authorization outcomes so both reasons stay visible when they coincide.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: OperationErrorKind
    detail: ErrorDetail
    missing_capability: bool = False
    paused: bool = False

    @property
    def code(self) -> str:
        return self.detail.code

    @property
    def message(self) -> str:
        return self.detail.message

    @property
    def category(self) -> ErrorCategory:
        return self.detail.category

    @property
    def retryable(self) -> bool:
        return self.detail.retryable

    @property
    def metadata(self) -> Mapping[str, str]:
        return self.detail.metadata


class OperationSnapshot(BaseModel):
    """Published view of the live operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    operation_kind: str
    status: OperationStatus
    payload: Any | None = None
    operation_id: str | None = None
    error: OperationError | None = None
    updated_at: datetime


class OperationRecord(BaseModel):
    """Immutable history entry for one settled operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    record_id: str
    operation_kind: str
    payload: Any | None = None
    outcome: OperationStatus
    error: OperationError | None = None
    operation_id: str | None = None
    timestamp: datetime

    @property
    def ok(self) -> bool:
        return self.outcome is OperationStatus.SUCCEEDED

    @property
    def errors(self) -> tuple[OperationError, ...]:
        if self.error is None:
            return ()
        return (self.error,)


def utc_now() -> datetime:
    """Return current UTC timestamp for operation bookkeeping."""
    return datetime.now(UTC)
