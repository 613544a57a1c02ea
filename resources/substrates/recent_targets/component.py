"""Component declaration for the recent-targets local storage substrate."""

from __future__ import annotations

from typing import Final

RESOURCE_COMPONENT_ID: Final[str] = "substrate_recent_targets"
