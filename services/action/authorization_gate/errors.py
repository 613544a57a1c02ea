"""Authorization Gate error codes and boundary error mapping."""

from __future__ import annotations

from typing import Final

from packages.ledger_shared.errors import (
    ErrorDetail,
    codes,
    dependency_error,
    validation_error,
)
from resources.adapters.ledger_rpc import RemoteReadError

CAPABILITY_LOOKUP_FAILED: Final[str] = "CAPABILITY_LOOKUP_FAILED"
PAUSE_LOOKUP_FAILED: Final[str] = "PAUSE_LOOKUP_FAILED"


def lookup_error(*, code: str, exc: RemoteReadError) -> ErrorDetail:
    """Map one failed boundary read to a retryable dependency error."""
    metadata = {"query_kind": exc.operation}
    if exc.code:
        metadata["remote_code"] = exc.code
    return dependency_error(
        str(exc) or "remote lookup failed",
        code=code,
        retryable=exc.retryable,
        metadata=metadata,
    )


def invalid_principal_error(principal: str) -> ErrorDetail:
    """Build the error reported when a principal is not an address."""
    return validation_error(
        f"principal is not a valid address: {principal!r}",
        code=codes.INVALID_ADDRESS,
    )
