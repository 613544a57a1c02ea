"""Operation Controller error codes and ``OperationError`` builders."""

from __future__ import annotations

from typing import Final, Mapping

from packages.ledger_shared.errors import (
    ErrorDetail,
    codes,
    dependency_error,
    policy_error,
    validation_error,
)
from services.action.operation_controller.domain import (
    OperationError,
    OperationErrorKind,
    OperationStatus,
)

CAPABILITY_MISSING: Final[str] = "CAPABILITY_MISSING"
SYSTEM_PAUSED: Final[str] = "SYSTEM_PAUSED"
AUTHORIZATION_CHECK_FAILED: Final[str] = "AUTHORIZATION_CHECK_FAILED"
SUBMISSION_REJECTED: Final[str] = "SUBMISSION_REJECTED"
EXECUTION_FAILED: Final[str] = "EXECUTION_FAILED"
CONFIRMATION_TIMEOUT: Final[str] = "CONFIRMATION_TIMEOUT"
OPERATION_ABANDONED: Final[str] = "OPERATION_ABANDONED"


def validation_failure(
    message: str,
    *,
    metadata: Mapping[str, str] | None = None,
) -> OperationError:
    return OperationError(
        kind=OperationErrorKind.VALIDATION,
        detail=validation_error(
            message,
            code=codes.VALIDATION_ERROR,
            metadata=metadata,
        ),
    )


def authorization_failure(*, missing_capability: bool, paused: bool) -> OperationError:
    """Build the ``UNAUTHORIZED`` error; a missing capability is primary."""
    if missing_capability:
        return OperationError(
            kind=OperationErrorKind.AUTHORIZATION,
            detail=policy_error(
                "principal does not hold the required capability",
                code=CAPABILITY_MISSING,
                metadata={"paused": str(paused).lower()},
            ),
            missing_capability=True,
            paused=paused,
        )
    return OperationError(
        kind=OperationErrorKind.SYSTEM_PAUSED,
        detail=policy_error("system is paused", code=SYSTEM_PAUSED),
        paused=True,
    )


def check_failure(errors: tuple[ErrorDetail, ...]) -> OperationError:
    """Collapse undeterminable gate lookups into one dependency error."""
    message = "; ".join(error.message for error in errors)
    if not message:
        message = "authorization check failed"
    return OperationError(
        kind=OperationErrorKind.CHECK_FAILED,
        detail=dependency_error(
            message,
            code=AUTHORIZATION_CHECK_FAILED,
            metadata={"causes": ",".join(error.code for error in errors)},
        ),
    )


def submission_failure(
    message: str,
    *,
    metadata: Mapping[str, str] | None = None,
) -> OperationError:
    return OperationError(
        kind=OperationErrorKind.SUBMISSION,
        detail=dependency_error(
            message or "submission rejected",
            code=SUBMISSION_REJECTED,
            retryable=False,
            metadata=metadata,
        ),
    )


def execution_failure(
    message: str,
    *,
    metadata: Mapping[str, str] | None = None,
) -> OperationError:
    return OperationError(
        kind=OperationErrorKind.EXECUTION,
        detail=dependency_error(
            message or "operation failed on the remote ledger",
            code=EXECUTION_FAILED,
            retryable=False,
            metadata=metadata,
        ),
    )


def timeout_failure(timeout_seconds: float) -> OperationError:
    return OperationError(
        kind=OperationErrorKind.TIMEOUT,
        detail=dependency_error(
            f"confirmation not received within {timeout_seconds:g}s",
            code=CONFIRMATION_TIMEOUT,
            retryable=False,
        ),
    )


def abandoned_failure(stage: OperationStatus) -> OperationError:
    """Build the error for a local wait cancelled before the outcome was known."""
    return OperationError(
        kind=OperationErrorKind.EXECUTION,
        detail=dependency_error(
            f"operation abandoned while {stage.value}; remote outcome unknown",
            code=OPERATION_ABANDONED,
            retryable=False,
            metadata={"stage": stage.value},
        ),
    )
