"""Transport-agnostic contract for the remote ledger boundary."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol

from pydantic import BaseModel, ConfigDict


class PollStatus(str, Enum):
    """Receipt status reported for one submitted operation handle."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class PollResult(BaseModel):
    """One receipt poll answer; ``error`` is set only for failed receipts."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: PollStatus
    error: str | None = None

    @property
    def terminal(self) -> bool:
        """Return whether the receipt reached a final state."""
        return self.status is not PollStatus.PENDING


class RemoteBoundary(Protocol):
    """Protocol for read, submit and poll calls against the remote ledger.

    ``read`` raises ``RemoteReadError``, ``submit`` raises
    ``RemoteSubmissionError`` and ``poll`` raises ``RemotePollError``.
    """

    async def read(self, query_kind: str, params: Mapping[str, Any]) -> Any:
        """Run one stateless read query and return its decoded value."""

    async def submit(self, op_kind: str, params: Mapping[str, Any]) -> str:
        """Submit one state-changing request and return its operation handle."""

    async def poll(self, handle: str) -> PollResult:
        """Return current receipt status for one operation handle."""
