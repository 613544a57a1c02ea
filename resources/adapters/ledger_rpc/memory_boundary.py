"""In-process remote ledger boundary for local development and tests."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from resources.adapters.ledger_rpc.boundary import PollResult, PollStatus, RemoteBoundary
from resources.adapters.ledger_rpc.errors import (
    RemotePollError,
    RemoteReadError,
    RemoteSubmissionError,
)

QueryAnswer = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True)
class BoundaryCall:
    """One recorded boundary invocation."""

    kind: str
    params: Mapping[str, Any]


class InMemoryRemoteBoundary(RemoteBoundary):
    """Scriptable boundary: configured read answers and poll sequences.

    Read answers may be plain values or callables receiving the params.
    Polls replay a scripted sequence per handle and then report
    ``confirmed`` unless a different default is configured.
    """

    def __init__(self, *, answers: Mapping[str, Any] | None = None) -> None:
        self._answers: dict[str, Any] = dict(answers or {})
        self._read_failures: dict[str, Exception] = {}
        self._poll_scripts: dict[str, deque[PollResult]] = {}
        self._default_poll = PollResult(status=PollStatus.CONFIRMED)
        self._next_poll_script: list[PollResult] = []
        self._submission_error: str | None = None
        self._handle_counter = 0
        self.read_calls: list[BoundaryCall] = []
        self.submit_calls: list[BoundaryCall] = []
        self.poll_calls: list[str] = []

    def set_answer(self, query_kind: str, answer: Any | QueryAnswer) -> None:
        """Configure the answer for one query kind."""
        self._answers[query_kind] = answer
        self._read_failures.pop(query_kind, None)

    def fail_reads(self, query_kind: str, message: str = "read failed") -> None:
        """Make every read of ``query_kind`` raise ``RemoteReadError``."""
        self._read_failures[query_kind] = RemoteReadError(
            message=message, operation=query_kind
        )

    def reject_submissions(self, message: str | None) -> None:
        """Make submissions raise ``RemoteSubmissionError`` (``None`` clears)."""
        self._submission_error = message

    def script_polls(self, *results: PollResult) -> None:
        """Queue poll answers for the next submitted handle."""
        self._next_poll_script = list(results)

    def set_default_poll(self, result: PollResult) -> None:
        """Answer returned once a handle's scripted polls are exhausted."""
        self._default_poll = result

    async def read(self, query_kind: str, params: Mapping[str, Any]) -> Any:
        self.read_calls.append(BoundaryCall(kind=query_kind, params=dict(params)))
        failure = self._read_failures.get(query_kind)
        if failure is not None:
            raise failure
        if query_kind not in self._answers:
            raise RemoteReadError(
                message=f"no answer configured for {query_kind}",
                operation=query_kind,
            )
        answer = self._answers[query_kind]
        if callable(answer):
            return answer(params)
        return answer

    async def submit(self, op_kind: str, params: Mapping[str, Any]) -> str:
        self.submit_calls.append(BoundaryCall(kind=op_kind, params=dict(params)))
        if self._submission_error is not None:
            raise RemoteSubmissionError(
                message=self._submission_error, operation=op_kind
            )
        self._handle_counter += 1
        handle = f"0x{self._handle_counter:064x}"
        self._poll_scripts[handle] = deque(self._next_poll_script)
        self._next_poll_script = []
        return handle

    async def poll(self, handle: str) -> PollResult:
        self.poll_calls.append(handle)
        script = self._poll_scripts.get(handle)
        if script is None:
            raise RemotePollError(message=f"unknown handle {handle}", operation="poll")
        if script:
            return script.popleft()
        return self._default_poll
