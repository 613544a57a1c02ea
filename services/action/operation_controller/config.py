"""Pydantic settings for guarded operation lifecycles."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.ledger_shared.config import LedgerSettings, resolve_component_settings
from services.action.operation_controller.component import SERVICE_COMPONENT_ID


class OperationControllerSettings(BaseModel):
    """History bound, confirmation polling and two-step defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    history_limit: int = Field(default=5, ge=1, le=10)
    poll_interval_seconds: float = Field(default=1.0, ge=0)
    confirmation_timeout_seconds: float | None = Field(default=None, gt=0)
    require_user_confirmation: bool = False


def resolve_operation_controller_settings(
    settings: LedgerSettings,
) -> OperationControllerSettings:
    """Resolve controller settings from ``components.service.operation_controller``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=OperationControllerSettings,
    )
