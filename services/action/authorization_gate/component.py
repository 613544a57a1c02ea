"""Component declaration for the Authorization Gate service."""

from __future__ import annotations

from typing import Final

SERVICE_COMPONENT_ID: Final[str] = "service_authorization_gate"
