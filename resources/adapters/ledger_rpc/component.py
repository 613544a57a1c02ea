"""Component declaration for the remote ledger RPC adapter."""

from __future__ import annotations

from typing import Final

RESOURCE_COMPONENT_ID: Final[str] = "adapter_ledger_rpc"
