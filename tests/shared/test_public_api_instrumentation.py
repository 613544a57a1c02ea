"""Tests for the public API instrumentation decorator and its concerns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

import pytest

from packages.ledger_shared.errors import ErrorDetail, dependency_error
from packages.ledger_shared.logging.public_api import (
    CompletionContext,
    InvocationContext,
    PublicApiMetricsConcern,
    public_api_instrumented,
)


class _RecordingConcern:
    """Concern capturing every invocation and completion event."""

    def __init__(self) -> None:
        self.invocations: list[InvocationContext] = []
        self.completions: list[CompletionContext] = []

    def on_invocation(self, context: InvocationContext) -> None:
        self.invocations.append(context)

    def on_completion(self, context: CompletionContext) -> None:
        self.completions.append(context)


class _BrokenConcern:
    def on_invocation(self, context: InvocationContext) -> None:
        raise RuntimeError("exporter down")

    def on_completion(self, context: CompletionContext) -> None:
        raise RuntimeError("exporter down")


@dataclass(frozen=True)
class _Result:
    ok: bool
    errors: tuple[ErrorDetail, ...] = ()


@dataclass
class _Counter:
    calls: list[tuple[float, Mapping[str, str]]] = field(default_factory=list)

    def add(self, amount: int | float, attributes: Mapping[str, str]) -> None:
        self.calls.append((amount, dict(attributes)))


@dataclass
class _Histogram:
    samples: list[tuple[float, Mapping[str, str]]] = field(default_factory=list)

    def record(self, amount: float, attributes: Mapping[str, str]) -> None:
        self.samples.append((amount, dict(attributes)))


def test_sync_method_reports_references_and_result_errors() -> None:
    """Sync calls report id-field references and result-level failures."""
    concern = _RecordingConcern()

    @public_api_instrumented(
        component_id="service_read_cache",
        id_fields=("key",),
        concerns=(concern,),
        default_concerns=False,
    )
    def lookup(*, key: str) -> _Result:
        return _Result(ok=False, errors=(dependency_error("node down"),))

    lookup(key="0xabc_2")

    assert concern.invocations[0].api_name == "lookup"
    assert concern.invocations[0].references == {"key": "0xabc_2"}
    completion = concern.completions[0]
    assert completion.success is False
    assert completion.errors == ["DEPENDENCY_FAILURE: node down"]
    assert completion.error_categories == ["dependency"]


@pytest.mark.asyncio
async def test_async_method_reports_raised_exception_and_reraises() -> None:
    """Async calls that raise are reported as internal failures."""
    concern = _RecordingConcern()

    @public_api_instrumented(
        component_id="service_operation_controller",
        concerns=(concern,),
        default_concerns=False,
    )
    async def request() -> None:
        raise KeyError("missing")

    with pytest.raises(KeyError):
        await request()

    completion = concern.completions[0]
    assert completion.success is False
    assert completion.error_categories == ["internal"]
    assert completion.errors[0].startswith("KeyError")


@pytest.mark.asyncio
async def test_concern_failures_do_not_break_the_call() -> None:
    """A failing concern is isolated from the decorated method."""

    @public_api_instrumented(
        component_id="service_authorization_gate",
        concerns=(_BrokenConcern(),),
        default_concerns=False,
    )
    async def is_paused() -> bool:
        return True

    assert await is_paused() is True


def test_decorator_requires_at_least_one_concern() -> None:
    """Disabling defaults without explicit concerns is rejected."""
    with pytest.raises(ValueError):
        public_api_instrumented(component_id="service_read_cache", default_concerns=False)


def test_metrics_concern_counts_calls_and_error_categories() -> None:
    """Failures increment the error counter once per category."""
    calls, errors, durations = _Counter(), _Counter(), _Histogram()
    concern = PublicApiMetricsConcern(
        public_api_calls_total=calls,
        public_api_duration_ms=durations,
        public_api_errors_total=errors,
    )
    invocation = InvocationContext(
        component_id="service_operation_controller",
        api_name="request",
        references={},
    )

    concern.on_completion(
        CompletionContext(
            invocation=invocation,
            success=False,
            duration_ms=3.5,
            errors=["CAPABILITY_MISSING: denied"],
            error_categories=["policy"],
        )
    )

    assert calls.calls[0][1]["outcome"] == "failure"
    assert durations.samples[0][0] == 3.5
    assert errors.calls == [
        (
            1,
            {
                "component_id": "service_operation_controller",
                "api_name": "request",
                "error_category": "policy",
            },
        )
    ]
