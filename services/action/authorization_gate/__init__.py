"""Authorization Gate service: capability and global pause checks."""

from services.action.authorization_gate.component import SERVICE_COMPONENT_ID
from services.action.authorization_gate.config import (
    AuthorizationGateSettings,
    resolve_authorization_gate_settings,
)
from services.action.authorization_gate.domain import GateDecision, GateState
from services.action.authorization_gate.errors import (
    CAPABILITY_LOOKUP_FAILED,
    PAUSE_LOOKUP_FAILED,
)
from services.action.authorization_gate.implementation import DefaultAuthorizationGate
from services.action.authorization_gate.service import (
    AuthorizationGate,
    build_authorization_gate,
)

__all__ = [
    "SERVICE_COMPONENT_ID",
    "CAPABILITY_LOOKUP_FAILED",
    "PAUSE_LOOKUP_FAILED",
    "AuthorizationGate",
    "AuthorizationGateSettings",
    "DefaultAuthorizationGate",
    "GateDecision",
    "GateState",
    "build_authorization_gate",
    "resolve_authorization_gate_settings",
]
