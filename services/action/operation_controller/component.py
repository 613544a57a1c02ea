"""Component declaration for the Operation Controller service."""

from __future__ import annotations

from typing import Final

SERVICE_COMPONENT_ID: Final[str] = "service_operation_controller"
