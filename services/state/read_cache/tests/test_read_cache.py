"""Behavior tests for the in-memory Read Cache and its read-through helper."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from packages.ledger_shared.config import load_settings
from resources.adapters.ledger_rpc import InMemoryRemoteBoundary, RemoteReadError
from services.state.read_cache.config import ReadCacheSettings
from services.state.read_cache.domain import ReadSource
from services.state.read_cache.errors import READ_UNAVAILABLE, TransientReadError
from services.state.read_cache.implementation import InMemoryReadCache
from services.state.read_cache.keys import cache_key
from services.state.read_cache.read_through import ReadThroughCache
from services.state.read_cache.service import build_read_cache

_ADDRESS = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"


class _Clock:
    """Manually advanced clock for TTL edge tests."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def _cache(clock: _Clock, *, ttl_seconds: float = 300.0) -> InMemoryReadCache:
    return InMemoryReadCache(
        settings=ReadCacheSettings(ttl_seconds=ttl_seconds),
        clock=clock,
    )


def test_cache_key_ignores_address_letter_case() -> None:
    """Keys built from differently-cased addresses collide."""
    assert cache_key(_ADDRESS, 2) == cache_key(_ADDRESS.lower(), 2)
    assert cache_key(_ADDRESS, 2) == f"{_ADDRESS.lower()}_2"


def test_cache_key_rejects_empty_parts() -> None:
    """Empty or missing key parts are rejected."""
    with pytest.raises(ValueError):
        cache_key()
    with pytest.raises(ValueError):
        cache_key(_ADDRESS, " ")


def test_cache_operations_accept_empty_and_blank_keys() -> None:
    """Direct cache calls never fail on odd keys; blank keys share one entry."""
    cache = _cache(_Clock())

    assert cache.get(key="") is None
    cache.put(key="  ", value=3)

    entry = cache.get(key="")
    assert entry is not None and entry.value == 3
    assert cache.invalidate(key=" ") is True
    assert len(cache) == 0


def test_get_is_case_insensitive() -> None:
    """A value stored under one casing is a hit under another."""
    cache = _cache(_Clock())
    cache.put(key=cache_key(_ADDRESS), value={"balance": 7})

    entry = cache.get(key=_ADDRESS.upper().replace("0X", "0x"))

    assert entry is not None
    assert entry.value == {"balance": 7}


def test_ttl_edge_hit_just_before_and_miss_just_after() -> None:
    """Entries are hits strictly inside the TTL window."""
    clock = _Clock()
    cache = _cache(clock)
    cache.put(key="k", value=1)

    clock.advance(seconds=300, milliseconds=-1)
    assert cache.get(key="k") is not None

    clock.advance(milliseconds=2)
    assert cache.get(key="k") is None


def test_stale_entry_is_not_deleted_on_read() -> None:
    """Reading a stale entry reports a miss but leaves it in place."""
    clock = _Clock()
    cache = _cache(clock)
    cache.put(key="k", value=1)
    clock.advance(seconds=301)

    assert cache.get(key="k") is None
    assert len(cache) == 1


def test_put_sweeps_stale_entries() -> None:
    """Every write evicts entries older than the TTL."""
    clock = _Clock()
    cache = _cache(clock)
    cache.put(key="old", value=1)
    clock.advance(seconds=200)
    cache.put(key="young", value=2)
    clock.advance(seconds=150)

    cache.put(key="new", value=3)

    assert cache.keys() == ["young", "new"]


def test_last_write_wins_and_key_stays_unique() -> None:
    """Repeated puts for one key keep exactly one entry with the last value."""
    clock = _Clock()
    cache = _cache(clock)
    cache.put(key=cache_key(_ADDRESS, 2), value="first")
    clock.advance(seconds=1)
    cache.put(key=cache_key(_ADDRESS.lower(), 2), value="second")

    entry = cache.get(key=cache_key(_ADDRESS, 2))

    assert len(cache) == 1
    assert entry is not None
    assert entry.value == "second"
    assert entry.fetched_at == clock.now


def test_invalidate_and_explicit_sweep() -> None:
    """Invalidate drops one entry; sweep reports evicted count."""
    clock = _Clock()
    cache = _cache(clock, ttl_seconds=10)
    cache.put(key="a", value=1)
    cache.put(key="b", value=2)

    assert cache.invalidate(key="A") is True
    assert cache.invalidate(key="a") is False

    clock.advance(seconds=10)
    assert cache.sweep() == 1
    assert len(cache) == 0


def test_build_read_cache_uses_configured_ttl() -> None:
    """Factory resolves ttl from component settings."""
    settings = load_settings(
        components={"service": {"read_cache": {"ttl_seconds": 5}}},
    )
    clock = _Clock()
    cache = build_read_cache(settings=settings, clock=clock)
    cache.put(key="k", value=1)
    clock.advance(seconds=5)

    assert cache.get(key="k") is None


@pytest.mark.asyncio
async def test_read_through_hit_within_ttl_and_refetch_after_expiry() -> None:
    """Second read within TTL is served from cache; after TTL it refetches."""
    clock = _Clock()
    boundary = InMemoryRemoteBoundary()
    answers = iter([100, 250])
    boundary.set_answer("balance", lambda params: next(answers))
    reader = ReadThroughCache(cache=_cache(clock), boundary=boundary)
    key = cache_key(_ADDRESS)

    first = await reader.read(key=key, query_kind="balance", params={"who": _ADDRESS})
    clock.advance(seconds=10)
    second = await reader.read(key=key, query_kind="balance", params={"who": _ADDRESS})
    clock.advance(seconds=291)
    third = await reader.read(key=key, query_kind="balance", params={"who": _ADDRESS})

    assert (first.source, first.value) == (ReadSource.REMOTE, 100)
    assert (second.source, second.value) == (ReadSource.CACHE, 100)
    assert (third.source, third.value) == (ReadSource.REMOTE, 250)
    assert len(boundary.read_calls) == 2


@pytest.mark.asyncio
async def test_read_through_reports_unavailable_on_remote_read_error() -> None:
    """Remote read failures surface as a miss and nothing is stored."""
    clock = _Clock()
    cache = _cache(clock)
    boundary = InMemoryRemoteBoundary()
    boundary.fail_reads("balance", "node unreachable")
    reader = ReadThroughCache(cache=cache, boundary=boundary)

    result = await reader.read(key="k", query_kind="balance", params={})

    assert result.source == ReadSource.UNAVAILABLE
    assert result.value is None
    assert result.ok is False
    assert result.errors[0].code == READ_UNAVAILABLE
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_get_or_fetch_swallows_transient_read_error() -> None:
    """A transient fetch failure is reported, then a later fetch succeeds."""
    reader = ReadThroughCache(cache=_cache(_Clock()))
    calls = 0

    async def fetch() -> str:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise TransientReadError(message="rate limited", key="k")
        return "value"

    missed = await reader.get_or_fetch(key="k", fetch=fetch)
    fetched = await reader.get_or_fetch(key="k", fetch=fetch)
    cached = await reader.get_or_fetch(key="k", fetch=fetch)

    assert missed.source == ReadSource.UNAVAILABLE
    assert fetched.source == ReadSource.REMOTE
    assert cached.source == ReadSource.CACHE
    assert calls == 2


@pytest.mark.asyncio
async def test_get_or_fetch_propagates_unexpected_errors() -> None:
    """Only transient read failures are absorbed."""
    reader = ReadThroughCache(cache=_cache(_Clock()))

    async def fetch() -> str:
        raise KeyError("bug")

    with pytest.raises(KeyError):
        await reader.get_or_fetch(key="k", fetch=fetch)


@pytest.mark.asyncio
async def test_invalidate_forces_refetch() -> None:
    """Invalidating a key after a write makes the next read go remote."""
    reader = ReadThroughCache(cache=_cache(_Clock()))
    values = iter(["before", "after"])

    async def fetch() -> str:
        return next(values)

    await reader.get_or_fetch(key="k", fetch=fetch)
    assert reader.invalidate(key="k") is True
    result = await reader.get_or_fetch(key="k", fetch=fetch)

    assert result.value == "after"
    assert result.source == ReadSource.REMOTE


def test_remote_read_error_is_retryable() -> None:
    """Remote read failures are classified as retryable."""
    assert RemoteReadError(message="x", operation="read").retryable is True
