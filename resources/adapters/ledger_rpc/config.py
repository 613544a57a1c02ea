"""Pydantic settings for the remote ledger RPC adapter."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.ledger_shared.config import LedgerSettings, resolve_component_settings
from resources.adapters.ledger_rpc.component import RESOURCE_COMPONENT_ID


class LedgerRpcSettings(BaseModel):
    """JSON-RPC endpoint and method naming for the remote ledger gateway."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = "http://localhost:8545"
    timeout_seconds: float = Field(default=10.0, gt=0)
    read_method: str = "ledger_read"
    submit_method: str = "ledger_submit"
    poll_method: str = "ledger_poll"

    @field_validator("url", "read_method", "submit_method", "poll_method")
    @classmethod
    def _require_text(cls, value: str) -> str:
        """Reject blank endpoint and method names."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("must be non-empty")
        return normalized


def resolve_ledger_rpc_settings(settings: LedgerSettings) -> LedgerRpcSettings:
    """Resolve adapter settings from ``components.adapter.ledger_rpc``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=LedgerRpcSettings,
    )
