"""Concrete Authorization Gate reading capability and pause state remotely."""

from __future__ import annotations

import asyncio
from typing import Any

from packages.ledger_shared.addresses import normalize_address
from packages.ledger_shared.errors import ErrorDetail
from packages.ledger_shared.logging import (
    fields,
    get_logger,
    log_context,
    public_api_instrumented,
)
from resources.adapters.ledger_rpc import RemoteBoundary, RemoteReadError
from services.action.authorization_gate.component import SERVICE_COMPONENT_ID
from services.action.authorization_gate.config import AuthorizationGateSettings
from services.action.authorization_gate.domain import GateDecision, GateState
from services.action.authorization_gate.errors import (
    CAPABILITY_LOOKUP_FAILED,
    PAUSE_LOOKUP_FAILED,
    invalid_principal_error,
    lookup_error,
)
from services.action.authorization_gate.service import AuthorizationGate

_LOGGER = get_logger(__name__)

# Outcome of one lookup: ``None`` when it could not be determined.
_Lookup = tuple[bool | None, tuple[ErrorDetail, ...]]


class DefaultAuthorizationGate(AuthorizationGate):
    """Gate that re-reads capability and pause state on every call.

    Nothing is cached between calls: holding a capability and the pause flag
    can change on the remote side at any time.
    """

    def __init__(
        self,
        *,
        boundary: RemoteBoundary,
        settings: AuthorizationGateSettings | None = None,
    ) -> None:
        self._boundary = boundary
        self._settings = settings or AuthorizationGateSettings()
        self._state = GateState.UNCHECKED
        self._last_errors: tuple[ErrorDetail, ...] = ()

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def ready(self) -> bool | None:
        if self._state in (GateState.UNCHECKED, GateState.CHECKING):
            return None
        return self._state is GateState.READY

    @property
    def last_errors(self) -> tuple[ErrorDetail, ...]:
        return self._last_errors

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("principal", "capability_name"),
    )
    async def has_capability(self, *, principal: str, capability_name: str) -> bool:
        """Return whether ``principal`` holds the capability.

        Any lookup failure reports ``False``; the cause is left in
        ``last_errors``.
        """
        held, errors = await self._lookup_capability(
            principal=principal,
            capability_name=capability_name,
        )
        self._last_errors = errors
        return held is True

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    async def is_paused(self) -> bool:
        """Return the live pause flag, reporting paused when it is unknown."""
        paused, errors = await self._lookup_paused()
        self._last_errors = errors
        return paused is not False

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("principal", "capability_name"),
    )
    async def can_proceed(self, *, principal: str, capability_name: str) -> GateDecision:
        """Run capability and pause lookups concurrently and combine them."""
        self._state = GateState.CHECKING
        try:
            (held, capability_errors), (paused, pause_errors) = await asyncio.gather(
                self._lookup_capability(
                    principal=principal,
                    capability_name=capability_name,
                ),
                self._lookup_paused(),
            )
        except Exception:
            self._state = GateState.CHECK_FAILED
            raise

        errors = (*capability_errors, *pause_errors)
        # One known blocking answer settles the decision even if the other
        # lookup failed; its errors are still carried on the decision.
        if held is False or paused is True:
            state = GateState.BLOCKED
        elif held is None or paused is None:
            state = GateState.CHECK_FAILED
        else:
            state = GateState.READY

        decision = GateDecision(
            state=state,
            principal=principal,
            capability_name=capability_name,
            missing_capability=held is False,
            paused=paused is True,
            errors=errors,
        )
        self._state = state
        self._last_errors = errors
        with log_context(
            {
                fields.PRINCIPAL: principal,
                fields.CAPABILITY: capability_name,
                "gate_state": state.value,
                "missing_capability": decision.missing_capability,
                "paused": decision.paused,
            }
        ):
            _LOGGER.info("Authorization gate evaluated")
        return decision

    async def _lookup_capability(
        self,
        *,
        principal: str,
        capability_name: str,
    ) -> _Lookup:
        try:
            account = normalize_address(principal)
        except ValueError:
            return None, (invalid_principal_error(principal),)

        try:
            token = await self._boundary.read(
                self._settings.capability_token_query,
                {"capability": capability_name},
            )
            if token in (None, ""):
                return False, ()
            held = await self._boundary.read(
                self._settings.has_capability_query,
                {"capability": token, "account": account},
            )
        except RemoteReadError as exc:
            return None, (lookup_error(code=CAPABILITY_LOOKUP_FAILED, exc=exc),)
        return _as_bool(held), ()

    async def _lookup_paused(self) -> _Lookup:
        try:
            paused = await self._boundary.read(self._settings.is_paused_query, {})
        except RemoteReadError as exc:
            return None, (lookup_error(code=PAUSE_LOOKUP_FAILED, exc=exc),)
        return _as_bool(paused), ()


def _as_bool(value: Any) -> bool:
    """Interpret one remote boolean answer strictly."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "0x1"}
    return bool(value)
