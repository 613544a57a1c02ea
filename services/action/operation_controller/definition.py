"""Declarative description of one guarded operation kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from services.action.operation_controller.validation import Predicate


@dataclass(frozen=True)
class OperationDefinition:
    """What to validate, which capability to require and what to submit.

    ``kind`` is passed to ``RemoteBoundary.submit`` as the operation kind.
    ``target_field`` names the payload field remembered as a recent target
    after success. ``requires_confirmation`` overrides the configured
    two-step default when set.
    """

    kind: str
    capability: str
    payload_model: type[BaseModel]
    predicates: tuple[Predicate, ...] = ()
    target_field: str | None = None
    requires_confirmation: bool | None = None

    def to_params(self, payload: BaseModel) -> dict[str, Any]:
        """Serialize a validated payload into boundary submit params."""
        return payload.model_dump(mode="json")

    def target_of(self, payload: BaseModel) -> str | None:
        """Return the remembered target for a validated payload, if any."""
        if self.target_field is None:
            return None
        value = getattr(payload, self.target_field, None)
        if value in (None, ""):
            return None
        return str(value)
