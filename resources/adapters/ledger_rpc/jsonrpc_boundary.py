"""JSON-RPC 2.0 remote ledger boundary over the shared async HTTP client."""

from __future__ import annotations

from itertools import count
from typing import Any, Mapping

from pydantic import ValidationError

from packages.ledger_shared.http import AsyncHttpClient, HttpClientError
from packages.ledger_shared.logging import get_logger
from resources.adapters.ledger_rpc.boundary import PollResult, RemoteBoundary
from resources.adapters.ledger_rpc.config import LedgerRpcSettings
from resources.adapters.ledger_rpc.errors import (
    RemoteBoundaryError,
    RemotePollError,
    RemoteReadError,
    RemoteSubmissionError,
)

_LOGGER = get_logger(__name__)


class JsonRpcRemoteBoundary(RemoteBoundary):
    """Remote boundary speaking JSON-RPC 2.0 to a ledger gateway endpoint.

    Each call posts ``{"method": <configured>, "params": {...}}`` and reads
    ``result`` or ``error`` from the response body.
    """

    def __init__(
        self,
        *,
        settings: LedgerRpcSettings,
        client: AsyncHttpClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client or AsyncHttpClient(
            base_url=settings.url,
            timeout_seconds=settings.timeout_seconds,
        )
        self._request_ids = count(1)

    async def aclose(self) -> None:
        """Release HTTP transport resources."""
        await self._client.aclose()

    async def read(self, query_kind: str, params: Mapping[str, Any]) -> Any:
        """Run one read query through the configured read method."""
        return await self._call(
            method=self._settings.read_method,
            params={"query": query_kind, "args": dict(params)},
            error_type=RemoteReadError,
        )

    async def submit(self, op_kind: str, params: Mapping[str, Any]) -> str:
        """Submit one operation and return the gateway's handle string."""
        result = await self._call(
            method=self._settings.submit_method,
            params={"operation": op_kind, "args": dict(params)},
            error_type=RemoteSubmissionError,
        )
        if not isinstance(result, str) or result.strip() == "":
            raise RemoteSubmissionError(
                message="submit returned no operation handle",
                operation=self._settings.submit_method,
            )
        return result

    async def poll(self, handle: str) -> PollResult:
        """Poll receipt status for one handle."""
        result = await self._call(
            method=self._settings.poll_method,
            params={"handle": handle},
            error_type=RemotePollError,
        )
        try:
            return PollResult.model_validate(result)
        except ValidationError as exc:
            raise RemotePollError(
                message=f"malformed poll result for handle {handle}",
                operation=self._settings.poll_method,
            ) from exc

    async def _call(
        self,
        *,
        method: str,
        params: dict[str, Any],
        error_type: type[RemoteBoundaryError],
    ) -> Any:
        """Post one JSON-RPC request and unwrap its result or raise ``error_type``."""
        request_id = next(self._request_ids)
        body = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
        try:
            response = await self._client.post_json("", json=body)
        except HttpClientError as exc:
            _LOGGER.warning(
                "Ledger RPC transport failure: method=%s retryable=%s",
                method,
                exc.retryable,
            )
            raise error_type(
                message=f"{method} transport failure: {exc}",
                operation=method,
                retryable=exc.retryable,
            ) from exc

        if not isinstance(response, dict):
            raise error_type(message=f"{method} returned a non-object body", operation=method)

        error = response.get("error")
        if error is not None:
            code = ""
            message = str(error)
            if isinstance(error, dict):
                code = str(error.get("code", ""))
                message = str(error.get("message", "remote error"))
            raise error_type(
                message=f"{method} rejected: {message}",
                operation=method,
                code=code,
            )

        if "result" not in response:
            raise error_type(message=f"{method} returned no result", operation=method)
        return response["result"]
