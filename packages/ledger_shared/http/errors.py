"""Typed errors for the shared HTTP client helper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(eq=False)
class HttpClientError(Exception):
    """Base error for outbound HTTP client call failures."""

    message: str
    method: str
    url: str
    retryable: bool = False

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(eq=False)
class HttpRequestError(HttpClientError):
    """HTTP client transport-level failure."""

    cause: Exception | None = None


@dataclass(eq=False)
class HttpStatusError(HttpClientError):
    """HTTP client non-success status code failure."""

    status_code: int = 0
    response_body: str = ""
    response_headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(eq=False)
class HttpJsonDecodeError(HttpClientError):
    """HTTP client JSON decode failure for a successful response."""

    status_code: int = 0
    response_body: str = ""
    cause: Exception | None = None
