"""Generic guarded operation state machine.

One controller drives one operation kind through
validate, check, submit, confirm and settle. Each settled outcome is folded
into a bounded history and the live state returns to ``IDLE``.
"""

from __future__ import annotations

import asyncio
from collections import deque
from datetime import datetime
from typing import Any, Awaitable, Callable, Generic, TypeVar

from packages.ledger_shared.errors import exception_to_error
from packages.ledger_shared.ids import generate_ulid_str
from packages.ledger_shared.logging import (
    fields,
    get_logger,
    log_context,
    public_api_instrumented,
)
from resources.adapters.ledger_rpc import PollResult, PollStatus
from resources.substrates.recent_targets import RecentTargetsStore
from services.action.authorization_gate.domain import GateDecision, GateState
from services.action.operation_controller.component import SERVICE_COMPONENT_ID
from services.action.operation_controller.config import OperationControllerSettings
from services.action.operation_controller.domain import (
    OperationError,
    OperationRecord,
    OperationSnapshot,
    OperationStatus,
    utc_now,
)
from services.action.operation_controller.errors import (
    abandoned_failure,
    authorization_failure,
    check_failure,
    execution_failure,
    submission_failure,
    timeout_failure,
    validation_failure,
)
from services.action.operation_controller.service import (
    OperationController,
    SnapshotListener,
)
from services.action.operation_controller.validation import describe_validation_error

_LOGGER = get_logger(__name__)

TInput = TypeVar("TInput")


class GuardedOperationController(OperationController, Generic[TInput]):
    """Drive one operation kind through its guarded lifecycle.

    ``validate`` parses raw input and raises ``ValueError`` on rejection;
    any other exception it raises also settles as a validation failure.
    ``check_authorization`` is awaited at every ``CHECKING`` step and is
    never answered from an earlier decision. ``submit`` returns the remote
    handle and ``poll`` reports its receipt status.

    Only one operation is live at a time: ``request`` while not ``IDLE`` is
    ignored. Nothing is retried automatically. Cancelling the task awaiting
    ``request`` or ``confirm`` settles the live operation as failed.
    """

    def __init__(
        self,
        *,
        operation_kind: str,
        validate: Callable[[Any], TInput],
        check_authorization: Callable[[], Awaitable[GateDecision]],
        submit: Callable[[TInput], Awaitable[str]],
        poll: Callable[[str], Awaitable[PollResult]],
        settings: OperationControllerSettings | None = None,
        requires_confirmation: bool | None = None,
        target_of: Callable[[TInput], str | None] | None = None,
        recent_targets: RecentTargetsStore | None = None,
        clock: Callable[[], datetime] | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self._operation_kind = operation_kind
        self._validate = validate
        self._check_authorization = check_authorization
        self._submit = submit
        self._poll = poll
        self._settings = settings or OperationControllerSettings()
        self._requires_confirmation = (
            self._settings.require_user_confirmation
            if requires_confirmation is None
            else requires_confirmation
        )
        self._target_of = target_of
        self._recent_targets = recent_targets
        self._clock = clock or utc_now
        self._sleep = sleep or asyncio.sleep
        self._history: deque[OperationRecord] = deque(
            maxlen=self._settings.history_limit
        )
        self._listeners: list[SnapshotListener] = []
        self._status = OperationStatus.IDLE
        self._payload: Any | None = None
        self._validated: TInput | None = None
        self._operation_id: str | None = None
        self._error: OperationError | None = None
        self._updated_at = self._clock()

    @property
    def operation_kind(self) -> str:
        return self._operation_kind

    @property
    def requires_confirmation(self) -> bool:
        return self._requires_confirmation

    @property
    def status(self) -> OperationStatus:
        return self._status

    @property
    def snapshot(self) -> OperationSnapshot:
        return OperationSnapshot(
            operation_kind=self._operation_kind,
            status=self._status,
            payload=self._payload,
            operation_id=self._operation_id,
            error=self._error,
            updated_at=self._updated_at,
        )

    @property
    def history(self) -> tuple[OperationRecord, ...]:
        return tuple(self._history)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    async def request(self, payload: Any) -> OperationRecord | None:
        """Validate, check and run one operation when the controller is idle."""
        if self._status is not OperationStatus.IDLE:
            with self._log_context():
                _LOGGER.warning("Operation request ignored while another is live")
            return None

        self._payload = payload
        self._transition(OperationStatus.VALIDATING)
        try:
            validated = self._validate(payload)
        except ValueError as exc:
            return self._settle(
                OperationStatus.FAILED,
                validation_failure(describe_validation_error(exc)),
            )
        except Exception as exc:  # noqa: BLE001
            return self._settle(
                OperationStatus.FAILED,
                validation_failure(
                    describe_validation_error(exc),
                    metadata=_exception_metadata(exc),
                ),
            )

        self._validated = validated
        self._payload = validated
        return await self._run_guarded(confirmed=False)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    async def confirm(self) -> OperationRecord | None:
        """Re-check authorization and run an operation awaiting confirmation."""
        if self._status is not OperationStatus.AWAITING_USER_CONFIRMATION:
            with self._log_context():
                _LOGGER.warning("Operation confirm ignored; nothing is awaiting it")
            return None
        return await self._run_guarded(confirmed=True)

    def cancel(self) -> bool:
        """Drop an operation awaiting confirmation without recording history."""
        if self._status is not OperationStatus.AWAITING_USER_CONFIRMATION:
            return False
        with self._log_context():
            _LOGGER.info("Operation cancelled before submission")
        self._reset()
        return True

    async def _run_guarded(self, *, confirmed: bool) -> OperationRecord | None:
        """Run the remaining lifecycle, settling it if the caller is cancelled.

        The remote operation is never cancelled; only the local wait is
        abandoned so the controller can accept a new request.
        """
        try:
            return await self._check_then_run(confirmed=confirmed)
        except asyncio.CancelledError:
            if self._status not in (
                OperationStatus.IDLE,
                OperationStatus.AWAITING_USER_CONFIRMATION,
            ):
                self._settle(OperationStatus.FAILED, abandoned_failure(self._status))
            raise

    async def _check_then_run(self, *, confirmed: bool) -> OperationRecord | None:
        self._transition(OperationStatus.CHECKING)
        try:
            decision = await self._check_authorization()
        except Exception as exc:  # noqa: BLE001
            return self._settle(
                OperationStatus.FAILED,
                check_failure((exception_to_error(exc),)),
            )

        if decision.state is GateState.CHECK_FAILED:
            return self._settle(OperationStatus.FAILED, check_failure(decision.errors))
        if not decision.allowed:
            missing = decision.missing_capability or not decision.paused
            return self._settle(
                OperationStatus.UNAUTHORIZED,
                authorization_failure(missing_capability=missing, paused=decision.paused),
            )

        if self._requires_confirmation and not confirmed:
            self._transition(OperationStatus.AWAITING_USER_CONFIRMATION)
            return None
        return await self._submit_and_confirm()

    async def _submit_and_confirm(self) -> OperationRecord:
        self._transition(OperationStatus.PENDING)
        try:
            handle = await self._submit(self._validated)
        except Exception as exc:  # noqa: BLE001
            return self._settle(
                OperationStatus.FAILED,
                submission_failure(str(exc), metadata=_exception_metadata(exc)),
            )

        self._operation_id = handle
        self._transition(OperationStatus.CONFIRMING)
        timeout = self._settings.confirmation_timeout_seconds
        try:
            if timeout is None:
                receipt = await self._await_receipt(handle)
            else:
                receipt = await asyncio.wait_for(self._await_receipt(handle), timeout)
        except asyncio.TimeoutError:
            return self._settle(OperationStatus.FAILED, timeout_failure(timeout or 0.0))
        except Exception as exc:  # noqa: BLE001
            return self._settle(
                OperationStatus.FAILED,
                execution_failure(str(exc), metadata=_exception_metadata(exc)),
            )

        if receipt.status is PollStatus.FAILED:
            return self._settle(
                OperationStatus.FAILED,
                execution_failure(receipt.error or ""),
            )
        return self._settle(OperationStatus.SUCCEEDED, None)

    async def _await_receipt(self, handle: str) -> PollResult:
        while True:
            receipt = await self._poll(handle)
            if receipt.terminal:
                return receipt
            await self._sleep(self._settings.poll_interval_seconds)

    def _settle(
        self,
        outcome: OperationStatus,
        error: OperationError | None,
    ) -> OperationRecord:
        """Record one terminal outcome, publish it, then reset to idle."""
        record = OperationRecord(
            record_id=generate_ulid_str(),
            operation_kind=self._operation_kind,
            payload=self._payload,
            outcome=outcome,
            error=error,
            operation_id=self._operation_id,
            timestamp=self._clock(),
        )
        self._history.append(record)
        self._error = error
        self._transition(outcome)

        context: dict[str, object] = {fields.OUTCOME: outcome.value}
        if error is not None:
            context[fields.ERRORS] = [f"{error.code}: {error.message}"]
            context[fields.ERROR_CATEGORY] = error.category.value
            context["error_kind"] = error.kind.value
        with self._log_context(), log_context(context):
            if outcome is OperationStatus.SUCCEEDED:
                _LOGGER.info("Operation settled")
            else:
                _LOGGER.warning("Operation settled")

        if outcome is OperationStatus.SUCCEEDED:
            self._remember_target()
        self._reset()
        return record

    def _remember_target(self) -> None:
        if self._recent_targets is None or self._target_of is None:
            return
        if self._validated is None:
            return
        target = self._target_of(self._validated)
        if not target:
            return
        try:
            self._recent_targets.remember(target)
        except (OSError, ValueError) as exc:
            with self._log_context(), log_context({fields.ERRORS: [str(exc)]}):
                _LOGGER.warning("Failed to remember recent operation target")

    def _reset(self) -> None:
        self._payload = None
        self._validated = None
        self._operation_id = None
        self._error = None
        self._transition(OperationStatus.IDLE)

    def _transition(self, status: OperationStatus) -> None:
        self._status = status
        self._updated_at = self._clock()
        with self._log_context():
            _LOGGER.debug("Operation status changed")
        snapshot = self.snapshot
        for listener in tuple(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # noqa: BLE001
                with self._log_context():
                    _LOGGER.exception("Operation status listener failed")

    def _log_context(self) -> Any:
        payload: dict[str, object] = {
            fields.COMPONENT_ID: SERVICE_COMPONENT_ID,
            fields.OPERATION_KIND: self._operation_kind,
            fields.OPERATION_STATUS: self._status.value,
        }
        if self._operation_id is not None:
            payload[fields.OPERATION_ID] = self._operation_id
        return log_context(payload)


def _exception_metadata(exc: Exception) -> dict[str, str]:
    metadata = {"exception_type": type(exc).__name__}
    remote_code = getattr(exc, "code", "")
    if remote_code:
        metadata["remote_code"] = str(remote_code)
    return metadata
