"""Recent-targets substrate: persisted pre-fill list for operation forms."""

from resources.substrates.recent_targets.component import RESOURCE_COMPONENT_ID
from resources.substrates.recent_targets.config import (
    RecentTargetsSettings,
    resolve_recent_targets_settings,
)
from resources.substrates.recent_targets.json_file_store import (
    JsonFileRecentTargetsStore,
)
from resources.substrates.recent_targets.substrate import RecentTargetsStore

__all__ = [
    "RESOURCE_COMPONENT_ID",
    "JsonFileRecentTargetsStore",
    "RecentTargetsSettings",
    "RecentTargetsStore",
    "resolve_recent_targets_settings",
]
