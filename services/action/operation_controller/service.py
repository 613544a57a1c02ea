"""Authoritative in-process Operation Controller contract and wiring."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from packages.ledger_shared.config import LedgerSettings
from resources.adapters.ledger_rpc import RemoteBoundary
from resources.substrates.recent_targets import RecentTargetsStore
from services.action.authorization_gate.service import AuthorizationGate
from services.action.operation_controller.definition import OperationDefinition
from services.action.operation_controller.domain import (
    OperationRecord,
    OperationSnapshot,
    OperationStatus,
)

SnapshotListener = Callable[[OperationSnapshot], None]


class OperationController(ABC):
    """Public API for driving one guarded operation at a time."""

    @property
    @abstractmethod
    def status(self) -> OperationStatus:
        """Return the live operation status."""

    @property
    @abstractmethod
    def snapshot(self) -> OperationSnapshot:
        """Return the published view of the live operation."""

    @property
    @abstractmethod
    def history(self) -> tuple[OperationRecord, ...]:
        """Return settled outcomes, oldest first."""

    @abstractmethod
    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a status listener and return its unsubscribe callable."""

    @abstractmethod
    async def request(self, payload: Any) -> OperationRecord | None:
        """Start one operation when idle.

        Returns the settled record, or ``None`` when the request was ignored
        because another operation is live or when it is parked awaiting user
        confirmation.
        """

    @abstractmethod
    async def confirm(self) -> OperationRecord | None:
        """Continue an operation parked awaiting user confirmation."""

    @abstractmethod
    def cancel(self) -> bool:
        """Abandon an operation parked awaiting user confirmation."""


def build_guarded_operation(
    *,
    settings: LedgerSettings,
    definition: OperationDefinition,
    gate: AuthorizationGate,
    boundary: RemoteBoundary,
    principal: Callable[[], str],
    recent_targets: RecentTargetsStore | None = None,
) -> OperationController:
    """Wire one operation definition to the gate and the remote boundary.

    ``principal`` is called at every check so a session change is picked up
    by the next operation.
    """
    from services.action.authorization_gate.domain import GateDecision
    from services.action.operation_controller.config import (
        resolve_operation_controller_settings,
    )
    from services.action.operation_controller.implementation import (
        GuardedOperationController,
    )
    from services.action.operation_controller.validation import payload_validator

    async def check_authorization() -> GateDecision:
        return await gate.can_proceed(
            principal=principal(),
            capability_name=definition.capability,
        )

    async def submit(payload: Any) -> str:
        return await boundary.submit(definition.kind, definition.to_params(payload))

    return GuardedOperationController(
        operation_kind=definition.kind,
        validate=payload_validator(definition.payload_model, definition.predicates),
        check_authorization=check_authorization,
        submit=submit,
        poll=boundary.poll,
        settings=resolve_operation_controller_settings(settings),
        requires_confirmation=definition.requires_confirmation,
        target_of=definition.target_of,
        recent_targets=recent_targets,
    )
