"""Unit tests for the shared asynchronous HTTP client wrapper."""

from __future__ import annotations

import json

import httpx
import pytest

from packages.ledger_shared.http import (
    AsyncHttpClient,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
)


def _client(handler) -> AsyncHttpClient:
    return AsyncHttpClient(
        base_url="https://rpc.example.test",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_post_json_sends_body_and_decodes_payload() -> None:
    """post_json serializes the body and returns decoded JSON."""
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"result": 7}, request=request)

    async with _client(handler) as client:
        payload = await client.post_json("/rpc", json={"method": "ledger_read"})

    assert payload == {"result": 7}
    assert seen == [{"method": "ledger_read"}]


@pytest.mark.asyncio
async def test_request_maps_status_failure_to_typed_error() -> None:
    """Non-2xx responses raise HttpStatusError with retryability."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable", request=request)

    client = _client(handler)
    try:
        with pytest.raises(HttpStatusError) as exc_info:
            await client.request("POST", "/rpc")
    finally:
        await client.aclose()

    error = exc_info.value
    assert error.method == "POST"
    assert error.status_code == 503
    assert error.retryable is True
    assert error.response_body == "unavailable"


@pytest.mark.asyncio
async def test_client_errors_are_not_retryable() -> None:
    """4xx responses other than 429 are final."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="bad request", request=request)

    async with _client(handler) as client:
        with pytest.raises(HttpStatusError) as exc_info:
            await client.post_json("/rpc", json={})

    assert exc_info.value.retryable is False


@pytest.mark.asyncio
async def test_request_maps_transport_failure_to_typed_error() -> None:
    """Transport failures raise retryable HttpRequestError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection failed", request=request)

    async with _client(handler) as client:
        with pytest.raises(HttpRequestError) as exc_info:
            await client.request("POST", "/rpc")

    error = exc_info.value
    assert error.method == "POST"
    assert error.url == "https://rpc.example.test/rpc"
    assert error.retryable is True
    assert isinstance(error.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_post_json_maps_invalid_json_to_decode_error() -> None:
    """A successful response that is not JSON raises HttpJsonDecodeError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>", request=request)

    async with _client(handler) as client:
        with pytest.raises(HttpJsonDecodeError) as exc_info:
            await client.post_json("/rpc", json={})

    assert exc_info.value.status_code == 200
    assert exc_info.value.response_body == "<html>"
