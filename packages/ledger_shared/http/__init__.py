"""Shared HTTP client helpers."""

from .client import AsyncHttpClient
from .errors import (
    HttpClientError,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
)

__all__ = [
    "AsyncHttpClient",
    "HttpClientError",
    "HttpJsonDecodeError",
    "HttpRequestError",
    "HttpStatusError",
]
