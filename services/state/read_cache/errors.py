"""Read Cache error codes and transient read failures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from packages.ledger_shared.errors import ErrorDetail, dependency_error

READ_UNAVAILABLE: Final[str] = "READ_UNAVAILABLE"


@dataclass(eq=False)
class TransientReadError(Exception):
    """A fetch for a cache miss failed in a way that may succeed later."""

    message: str
    key: str = ""

    def __str__(self) -> str:
        return self.message


def read_unavailable_error(*, key: str, message: str) -> ErrorDetail:
    """Build the error attached to an ``unavailable`` read-through result."""
    return dependency_error(
        message or "remote read unavailable",
        code=READ_UNAVAILABLE,
        retryable=True,
        metadata={"cache_key": key},
    )
