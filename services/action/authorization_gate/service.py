"""Authoritative in-process Authorization Gate contract."""

from __future__ import annotations

from abc import ABC, abstractmethod

from packages.ledger_shared.config import LedgerSettings
from packages.ledger_shared.errors import ErrorDetail
from resources.adapters.ledger_rpc import RemoteBoundary
from services.action.authorization_gate.domain import GateDecision, GateState


class AuthorizationGate(ABC):
    """Public API for capability and global pause checks."""

    @abstractmethod
    async def has_capability(self, *, principal: str, capability_name: str) -> bool:
        """Return whether ``principal`` currently holds ``capability_name``."""

    @abstractmethod
    async def is_paused(self) -> bool:
        """Return whether the remote system is globally paused."""

    @abstractmethod
    async def can_proceed(self, *, principal: str, capability_name: str) -> GateDecision:
        """Run both checks concurrently and return one combined decision."""

    @property
    @abstractmethod
    def state(self) -> GateState:
        """Return the most recent combined check state."""

    @property
    @abstractmethod
    def ready(self) -> bool | None:
        """Return ``None`` while unknown, else whether the last check passed."""

    @property
    @abstractmethod
    def last_errors(self) -> tuple[ErrorDetail, ...]:
        """Return lookup errors recorded by the most recent public call."""


def build_authorization_gate(
    *,
    settings: LedgerSettings,
    boundary: RemoteBoundary,
) -> AuthorizationGate:
    """Build the default Authorization Gate from typed settings."""
    from services.action.authorization_gate.config import (
        resolve_authorization_gate_settings,
    )
    from services.action.authorization_gate.implementation import (
        DefaultAuthorizationGate,
    )

    return DefaultAuthorizationGate(
        boundary=boundary,
        settings=resolve_authorization_gate_settings(settings),
    )
