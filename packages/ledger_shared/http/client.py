"""Asynchronous HTTP client wrapper over httpx used by remote ledger adapters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .errors import HttpJsonDecodeError, HttpRequestError, HttpStatusError


def _response_text(response: httpx.Response) -> str:
    """Return response text without raising secondary decode errors."""
    try:
        return response.text
    except Exception:  # noqa: BLE001
        return ""


def _status_error(response: httpx.Response) -> HttpStatusError:
    """Build a typed status error from one HTTP response."""
    status_code = response.status_code
    return HttpStatusError(
        message=f"HTTP {status_code} for {response.request.method} {response.request.url}",
        method=response.request.method,
        url=str(response.request.url),
        retryable=status_code >= 500 or status_code == 429,
        status_code=status_code,
        response_body=_response_text(response),
        response_headers=dict(response.headers.items()),
    )


class AsyncHttpClient:
    """Thin asynchronous wrapper over ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close underlying transport resources when owned."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        raise_for_status: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue one request and map transport/status failures to typed errors."""
        try:
            response = await self._client.request(method=method, url=url, **kwargs)
        except httpx.RequestError as exc:
            request = exc.request
            request_url = str(request.url) if request is not None else url
            request_method = request.method if request is not None else method.upper()
            raise HttpRequestError(
                message=f"HTTP request failed for {request_method} {request_url}",
                method=request_method,
                url=request_url,
                retryable=True,
                cause=exc,
            ) from exc

        if raise_for_status and response.is_error:
            raise _status_error(response)
        return response

    async def post_json(self, url: str, *, json: Any, **kwargs: Any) -> Any:
        """Issue one POST request with a JSON body and decode the JSON response."""
        response = await self.request("POST", url, json=json, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise HttpJsonDecodeError(
                message=f"Invalid JSON response for {response.request.method} {response.request.url}",
                method=response.request.method,
                url=str(response.request.url),
                retryable=False,
                status_code=response.status_code,
                response_body=_response_text(response),
                cause=exc,
            ) from exc
