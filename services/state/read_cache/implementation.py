"""In-memory implementation of the Read Cache public API."""

from __future__ import annotations

from datetime import datetime, timedelta
from threading import RLock
from typing import Any, Callable

from packages.ledger_shared.logging import get_logger, log_context
from packages.ledger_shared.logging import fields
from services.state.read_cache.component import SERVICE_COMPONENT_ID
from services.state.read_cache.config import ReadCacheSettings
from services.state.read_cache.domain import CacheEntry, utc_now
from services.state.read_cache.keys import normalize_key
from services.state.read_cache.service import ReadCache

_LOGGER = get_logger(__name__)


class InMemoryReadCache(ReadCache):
    """Insertion-ordered TTL cache guarded by one re-entrant lock.

    Stale entries stay in place on ``get`` and are only evicted by the sweep
    that runs on every ``put`` or by an explicit ``sweep`` call.
    """

    def __init__(
        self,
        *,
        settings: ReadCacheSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings or ReadCacheSettings()
        self._ttl = timedelta(seconds=self._settings.ttl_seconds)
        self._clock = clock or utc_now
        self._lock = RLock()
        self._entries: dict[str, CacheEntry[Any]] = {}

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def get(self, *, key: str) -> CacheEntry[Any] | None:
        normalized = normalize_key(key)
        with self._lock:
            entry = self._entries.get(normalized)
            if entry is None:
                return None
            if not entry.is_fresh(now=self._clock(), ttl=self._ttl):
                return None
            return entry

    def put(self, *, key: str, value: Any) -> CacheEntry[Any]:
        normalized = normalize_key(key)
        with self._lock:
            entry = CacheEntry[Any](
                key=normalized,
                value=value,
                fetched_at=self._clock(),
            )
            # Re-insert so iteration order tracks the newest write.
            self._entries.pop(normalized, None)
            self._entries[normalized] = entry
            self._sweep_locked()
            return entry

    def invalidate(self, *, key: str) -> bool:
        normalized = normalize_key(key)
        with self._lock:
            return self._entries.pop(normalized, None) is not None

    def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked()

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[str]:
        """Return stored keys oldest-write first, fresh or stale."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep_locked(self) -> int:
        now = self._clock()
        stale = [
            key
            for key, entry in self._entries.items()
            if not entry.is_fresh(now=now, ttl=self._ttl)
        ]
        for key in stale:
            del self._entries[key]
        if stale:
            with log_context(
                {
                    fields.COMPONENT_ID: SERVICE_COMPONENT_ID,
                    "evicted": len(stale),
                }
            ):
                _LOGGER.debug("Read cache sweep evicted stale entries")
        return len(stale)
