"""Read Cache service: TTL key/value store plus read-through helper."""

from services.state.read_cache.component import SERVICE_COMPONENT_ID
from services.state.read_cache.config import (
    ReadCacheSettings,
    resolve_read_cache_settings,
)
from services.state.read_cache.domain import CacheEntry, ReadResult, ReadSource
from services.state.read_cache.errors import READ_UNAVAILABLE, TransientReadError
from services.state.read_cache.implementation import InMemoryReadCache
from services.state.read_cache.keys import cache_key
from services.state.read_cache.read_through import ReadThroughCache
from services.state.read_cache.service import ReadCache, build_read_cache

__all__ = [
    "SERVICE_COMPONENT_ID",
    "READ_UNAVAILABLE",
    "CacheEntry",
    "InMemoryReadCache",
    "ReadCache",
    "ReadCacheSettings",
    "ReadResult",
    "ReadSource",
    "ReadThroughCache",
    "TransientReadError",
    "build_read_cache",
    "cache_key",
    "resolve_read_cache_settings",
]
