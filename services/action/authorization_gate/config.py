"""Pydantic settings for Authorization Gate remote queries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.ledger_shared.config import LedgerSettings, resolve_component_settings
from services.action.authorization_gate.component import SERVICE_COMPONENT_ID


class AuthorizationGateSettings(BaseModel):
    """Query kinds the gate reads through the remote boundary."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    capability_token_query: str = Field(default="capability_token", min_length=1)
    has_capability_query: str = Field(default="has_capability", min_length=1)
    is_paused_query: str = Field(default="is_paused", min_length=1)


def resolve_authorization_gate_settings(
    settings: LedgerSettings,
) -> AuthorizationGateSettings:
    """Resolve gate settings from ``components.service.authorization_gate``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=AuthorizationGateSettings,
    )
