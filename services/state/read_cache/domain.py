"""Domain contracts for Read Cache entries and read-through results."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from packages.ledger_shared.errors import ErrorDetail

V = TypeVar("V")


class CacheEntry(BaseModel, Generic[V]):
    """One cached remote read result keyed by a normalized key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    value: V
    fetched_at: datetime

    def age(self, *, now: datetime) -> timedelta:
        """Return how long ago this entry was fetched."""
        return now - self.fetched_at

    def is_fresh(self, *, now: datetime, ttl: timedelta) -> bool:
        """Return whether this entry may still be served as a hit."""
        return self.age(now=now) < ttl


class ReadSource(str, Enum):
    """Where a read-through result came from."""

    CACHE = "cache"
    REMOTE = "remote"
    UNAVAILABLE = "unavailable"


class ReadResult(BaseModel, Generic[V]):
    """Outcome of one read-through lookup.

    ``UNAVAILABLE`` means the remote read failed; callers treat it as a miss
    and may retry later. The failure detail is carried in ``errors``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    source: ReadSource
    value: V | None = None
    fetched_at: datetime | None = None
    errors: tuple[ErrorDetail, ...] = Field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.source is not ReadSource.UNAVAILABLE

    @property
    def hit(self) -> bool:
        return self.source is ReadSource.CACHE


def utc_now() -> datetime:
    """Return current UTC timestamp for cache bookkeeping."""
    return datetime.now(UTC)


