"""Component declaration for the Read Cache service."""

from __future__ import annotations

from typing import Final

SERVICE_COMPONENT_ID: Final[str] = "service_read_cache"
