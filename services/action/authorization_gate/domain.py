"""Domain contracts for capability and pause gate decisions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from packages.ledger_shared.errors import ErrorDetail


class GateState(str, Enum):
    """Combined check lifecycle for one gate instance."""

    UNCHECKED = "unchecked"
    CHECKING = "checking"
    READY = "ready"
    BLOCKED = "blocked"
    CHECK_FAILED = "check_failed"


class GateDecision(BaseModel):
    """Outcome of one combined capability and pause check.

    ``missing_capability`` and ``paused`` are reported independently so a
    ``BLOCKED`` decision can name every reason at once. A known missing
    capability or a known pause blocks even when the other lookup failed;
    those errors stay on the decision. ``CHECK_FAILED`` is left for checks
    that could not be settled either way.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    state: GateState
    principal: str
    capability_name: str
    missing_capability: bool = False
    paused: bool = False
    errors: tuple[ErrorDetail, ...] = ()

    @property
    def allowed(self) -> bool:
        return self.state is GateState.READY

    @property
    def ok(self) -> bool:
        return self.state is not GateState.CHECK_FAILED
