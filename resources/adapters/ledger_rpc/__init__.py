"""Remote ledger boundary contract and adapters."""

from resources.adapters.ledger_rpc.boundary import PollResult, PollStatus, RemoteBoundary
from resources.adapters.ledger_rpc.component import RESOURCE_COMPONENT_ID
from resources.adapters.ledger_rpc.config import (
    LedgerRpcSettings,
    resolve_ledger_rpc_settings,
)
from resources.adapters.ledger_rpc.errors import (
    RemoteBoundaryError,
    RemotePollError,
    RemoteReadError,
    RemoteSubmissionError,
)
from resources.adapters.ledger_rpc.jsonrpc_boundary import JsonRpcRemoteBoundary
from resources.adapters.ledger_rpc.memory_boundary import (
    BoundaryCall,
    InMemoryRemoteBoundary,
)

__all__ = [
    "RESOURCE_COMPONENT_ID",
    "BoundaryCall",
    "InMemoryRemoteBoundary",
    "JsonRpcRemoteBoundary",
    "LedgerRpcSettings",
    "PollResult",
    "PollStatus",
    "RemoteBoundary",
    "RemoteBoundaryError",
    "RemotePollError",
    "RemoteReadError",
    "RemoteSubmissionError",
    "resolve_ledger_rpc_settings",
]
