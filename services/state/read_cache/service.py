"""Authoritative in-process Read Cache contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable

from packages.ledger_shared.config import LedgerSettings
from services.state.read_cache.domain import CacheEntry


class ReadCache(ABC):
    """Public API for the time-bounded key/value store of remote reads."""

    @abstractmethod
    def get(self, *, key: str) -> CacheEntry[Any] | None:
        """Return the entry for ``key`` when fresh, otherwise ``None``."""

    @abstractmethod
    def put(self, *, key: str, value: Any) -> CacheEntry[Any]:
        """Store ``value`` under ``key`` stamped with the current time."""

    @abstractmethod
    def invalidate(self, *, key: str) -> bool:
        """Drop one entry and report whether it existed."""

    @abstractmethod
    def sweep(self) -> int:
        """Evict every stale entry and return how many were evicted."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of stored entries, fresh or stale."""


def build_read_cache(
    *,
    settings: LedgerSettings,
    clock: Callable[[], datetime] | None = None,
) -> ReadCache:
    """Build the default Read Cache implementation from typed settings."""
    from services.state.read_cache.config import resolve_read_cache_settings
    from services.state.read_cache.implementation import InMemoryReadCache

    return InMemoryReadCache(
        settings=resolve_read_cache_settings(settings),
        clock=clock,
    )
