"""Read-through helper pairing a ``ReadCache`` with a remote fetch."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping

from packages.ledger_shared.logging import (
    fields,
    get_logger,
    log_context,
    public_api_instrumented,
)
from resources.adapters.ledger_rpc import RemoteBoundary, RemoteReadError
from services.state.read_cache.component import SERVICE_COMPONENT_ID
from services.state.read_cache.domain import ReadResult, ReadSource
from services.state.read_cache.errors import TransientReadError, read_unavailable_error
from services.state.read_cache.keys import normalize_key
from services.state.read_cache.service import ReadCache

_LOGGER = get_logger(__name__)


class ReadThroughCache:
    """Serve reads from cache when fresh, otherwise fetch and store.

    A failed fetch never raises to the caller: the result reports
    ``source=unavailable`` and nothing is stored, so the next call retries.
    """

    def __init__(self, *, cache: ReadCache, boundary: RemoteBoundary | None = None) -> None:
        self._cache = cache
        self._boundary = boundary

    @property
    def cache(self) -> ReadCache:
        return self._cache

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("key",),
    )
    async def get_or_fetch(
        self,
        *,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
    ) -> ReadResult[Any]:
        """Return the cached value for ``key`` or fetch, store and return it."""
        normalized = normalize_key(key)
        entry = self._cache.get(key=normalized)
        if entry is not None:
            return ReadResult[Any](
                key=normalized,
                source=ReadSource.CACHE,
                value=entry.value,
                fetched_at=entry.fetched_at,
            )

        try:
            value = await fetch()
        except (TransientReadError, RemoteReadError) as exc:
            with log_context({fields.CACHE_KEY: normalized, fields.ERRORS: [str(exc)]}):
                _LOGGER.warning("Read-through fetch failed; reporting miss")
            return ReadResult[Any](
                key=normalized,
                source=ReadSource.UNAVAILABLE,
                errors=(read_unavailable_error(key=normalized, message=str(exc)),),
            )

        stored = self._cache.put(key=normalized, value=value)
        return ReadResult[Any](
            key=normalized,
            source=ReadSource.REMOTE,
            value=stored.value,
            fetched_at=stored.fetched_at,
        )

    async def read(
        self,
        *,
        key: str,
        query_kind: str,
        params: Mapping[str, Any],
    ) -> ReadResult[Any]:
        """Read-through one boundary query, caching its answer under ``key``."""
        if self._boundary is None:
            raise RuntimeError("ReadThroughCache.read requires a remote boundary")
        boundary = self._boundary

        async def fetch() -> Any:
            return await boundary.read(query_kind, params)

        return await self.get_or_fetch(key=key, fetch=fetch)

    def invalidate(self, *, key: str) -> bool:
        """Drop one entry after a write that changed the underlying data."""
        return self._cache.invalidate(key=key)
