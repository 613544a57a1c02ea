"""Pydantic settings for the recent-targets substrate."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from packages.ledger_shared.config import LedgerSettings, resolve_component_settings
from resources.substrates.recent_targets.component import RESOURCE_COMPONENT_ID


class RecentTargetsSettings(BaseModel):
    """Location and capacity of the persisted recent-targets list."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = "~/.local/share/ledger_console/recent_targets.json"
    max_entries: int = Field(default=5, gt=0)
    temp_prefix: str = "recent-targets"

    def resolved_path(self) -> Path:
        """Return the expanded absolute storage path."""
        return Path(self.path).expanduser().resolve()


def resolve_recent_targets_settings(settings: LedgerSettings) -> RecentTargetsSettings:
    """Resolve substrate settings from ``components.substrate.recent_targets``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=RecentTargetsSettings,
    )
