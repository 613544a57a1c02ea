"""Pydantic settings for Read Cache behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.ledger_shared.config import LedgerSettings, resolve_component_settings
from services.state.read_cache.component import SERVICE_COMPONENT_ID


class ReadCacheSettings(BaseModel):
    """Read Cache expiry settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ttl_seconds: float = Field(default=300.0, gt=0)


def resolve_read_cache_settings(settings: LedgerSettings) -> ReadCacheSettings:
    """Resolve cache settings from ``components.service.read_cache``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=ReadCacheSettings,
    )
