"""Composable instrumentation helpers for public component API methods.

``public_api_instrumented`` wraps sync or async methods so logging, tracing
and metrics concerns share one stable callsite contract. Results are
inspected duck-typed: anything with ``ok`` and ``errors`` attributes (for
example an operation record) reports its own success and error categories.
"""

from __future__ import annotations

import inspect
from contextvars import ContextVar
from dataclasses import dataclass
from functools import lru_cache, wraps
from time import perf_counter
from typing import Any, Callable, Mapping, Protocol, Sequence

from opentelemetry import metrics as otel_metrics
from opentelemetry import trace as otel_trace
from opentelemetry.trace import Span, Status, StatusCode

from packages.ledger_shared.config import load_settings

from . import fields
from .context import log_context


@dataclass(frozen=True)
class InvocationContext:
    """Structured metadata describing one public API invocation."""

    component_id: str
    api_name: str
    references: Mapping[str, str]


@dataclass(frozen=True)
class CompletionContext:
    """Structured metadata describing one completed public API invocation."""

    invocation: InvocationContext
    success: bool
    duration_ms: float
    errors: list[str]
    error_categories: list[str]


class PublicApiInstrumentationConcern(Protocol):
    """Hook contract for one public API instrumentation concern."""

    def on_invocation(self, context: InvocationContext) -> None:
        """Handle invocation-start event for one method call."""

    def on_completion(self, context: CompletionContext) -> None:
        """Handle completion event for one method call."""


class PublicApiLoggingConcern:
    """Logging concern implementation for invocation/completion events."""

    def __init__(self, *, logger: Any) -> None:
        self._logger = logger

    def on_invocation(self, context: InvocationContext) -> None:
        """Emit standardized structured invocation-start log."""
        with log_context(_invocation_log_context(context)):
            self._logger.debug("Public API invocation")

    def on_completion(self, context: CompletionContext) -> None:
        """Emit standardized structured completion log."""
        payload = _invocation_log_context(context.invocation)
        payload.update(
            {
                fields.EVENT: fields.PUBLIC_API_COMPLETION_EVENT,
                fields.SUCCESS: context.success,
                fields.DURATION_MS: context.duration_ms,
                fields.ERRORS: context.errors,
            }
        )
        with log_context(payload):
            if context.success:
                self._logger.info("Public API completion")
            else:
                self._logger.warning("Public API completion")


class _CounterLike(Protocol):
    """Minimal counter interface used by metrics concern."""

    def add(self, amount: int | float, attributes: Mapping[str, str]) -> None:
        """Record one counter increment with attributes."""


class _HistogramLike(Protocol):
    """Minimal histogram interface used by metrics concern."""

    def record(self, amount: float, attributes: Mapping[str, str]) -> None:
        """Record one sample with attributes."""


@dataclass(frozen=True)
class _TraceScope:
    """One in-flight trace scope for a decorated API invocation."""

    manager: Any
    span: Span


class PublicApiTracingConcern:
    """Tracing concern opening one span per public API invocation."""

    def __init__(self, *, tracer: otel_trace.Tracer) -> None:
        self._tracer = tracer
        self._active_scopes: ContextVar[tuple[_TraceScope, ...]] = ContextVar(
            "public_api_tracing_scopes", default=()
        )

    def on_invocation(self, context: InvocationContext) -> None:
        """Start one span for the current invocation and attach metadata."""
        manager = self._tracer.start_as_current_span(
            f"public_api.{context.component_id}.{context.api_name}"
        )
        span = manager.__enter__()
        span.set_attribute(fields.COMPONENT_ID, context.component_id)
        span.set_attribute(fields.API_NAME, context.api_name)
        for key, value in context.references.items():
            span.set_attribute(f"reference.{key}", value)
        self._active_scopes.set(
            (*self._active_scopes.get(), _TraceScope(manager=manager, span=span))
        )

    def on_completion(self, context: CompletionContext) -> None:
        """Finalize the current invocation span with completion metadata."""
        current = self._active_scopes.get()
        if len(current) == 0:
            return
        scope = current[-1]
        self._active_scopes.set(current[:-1])

        scope.span.set_attribute(fields.SUCCESS, context.success)
        scope.span.set_attribute(fields.DURATION_MS, context.duration_ms)
        scope.span.set_attribute(
            fields.OUTCOME, "success" if context.success else "failure"
        )
        scope.span.set_attribute("errors.count", len(context.errors))
        if not context.success:
            scope.span.set_status(Status(StatusCode.ERROR))
        scope.manager.__exit__(None, None, None)


class PublicApiMetricsConcern:
    """Metrics concern counting calls, latency and failures per API."""

    def __init__(
        self,
        *,
        public_api_calls_total: _CounterLike,
        public_api_duration_ms: _HistogramLike,
        public_api_errors_total: _CounterLike,
    ) -> None:
        self._public_api_calls_total = public_api_calls_total
        self._public_api_duration_ms = public_api_duration_ms
        self._public_api_errors_total = public_api_errors_total

    def on_invocation(self, context: InvocationContext) -> None:
        """No-op at invocation; metrics are emitted on completion."""
        del context

    def on_completion(self, context: CompletionContext) -> None:
        """Emit counters/histograms for completed invocation outcomes."""
        attrs = {
            fields.COMPONENT_ID: context.invocation.component_id,
            fields.API_NAME: context.invocation.api_name,
            fields.OUTCOME: "success" if context.success else "failure",
        }
        self._public_api_calls_total.add(1, attributes=attrs)
        self._public_api_duration_ms.record(context.duration_ms, attributes=attrs)

        if context.success:
            return

        for category in context.error_categories or ["unknown"]:
            self._public_api_errors_total.add(
                1,
                attributes={
                    fields.COMPONENT_ID: context.invocation.component_id,
                    fields.API_NAME: context.invocation.api_name,
                    fields.ERROR_CATEGORY: category,
                },
            )


def public_api_instrumented(
    *,
    component_id: str,
    api_name: str | None = None,
    id_fields: tuple[str, ...] = (),
    concerns: Sequence[PublicApiInstrumentationConcern] | None = None,
    logger: Any | None = None,
    default_concerns: bool = True,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate one public API method with composable instrumentation concerns.

    ``id_fields`` names keyword arguments copied into the invocation context
    as references. Default OTel tracing/metrics concerns are resolved lazily
    on first call so importing a component never reads configuration.
    """

    explicit: tuple[PublicApiInstrumentationConcern, ...] = tuple(concerns or ())
    if logger is not None:
        explicit = (PublicApiLoggingConcern(logger=logger), *explicit)
    if len(explicit) == 0 and not default_concerns:
        raise ValueError("public_api_instrumented requires at least one concern")

    def resolve() -> tuple[PublicApiInstrumentationConcern, ...]:
        if not default_concerns:
            return explicit
        return (*explicit, *_default_concerns())

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        method_name = api_name or func.__name__

        def invocation_for(kwargs: Mapping[str, Any]) -> InvocationContext:
            return InvocationContext(
                component_id=component_id,
                api_name=method_name,
                references={
                    name: str(kwargs[name])
                    for name in id_fields
                    if kwargs.get(name) not in (None, "")
                },
            )

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                resolved = resolve()
                invocation = invocation_for(kwargs)
                _emit_invocation(concerns=resolved, context=invocation, logger=logger)
                started = perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    _emit_completion(
                        concerns=resolved,
                        context=_failed_completion(invocation, started, exc),
                        logger=logger,
                    )
                    raise
                _emit_completion(
                    concerns=resolved,
                    context=_completion(invocation, started, result),
                    logger=logger,
                )
                return result

            return async_wrapper

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            resolved = resolve()
            invocation = invocation_for(kwargs)
            _emit_invocation(concerns=resolved, context=invocation, logger=logger)
            started = perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                _emit_completion(
                    concerns=resolved,
                    context=_failed_completion(invocation, started, exc),
                    logger=logger,
                )
                raise
            _emit_completion(
                concerns=resolved,
                context=_completion(invocation, started, result),
                logger=logger,
            )
            return result

        return wrapper

    return decorator


def _elapsed_ms(started: float) -> float:
    return round((perf_counter() - started) * 1000.0, 3)


def _failed_completion(
    invocation: InvocationContext, started: float, exc: Exception
) -> CompletionContext:
    """Build completion metadata for an invocation that raised."""
    return CompletionContext(
        invocation=invocation,
        success=False,
        duration_ms=_elapsed_ms(started),
        errors=[f"{type(exc).__name__}: {exc}"],
        error_categories=["internal"],
    )


def _completion(
    invocation: InvocationContext, started: float, result: object
) -> CompletionContext:
    """Build completion metadata from a returned result value."""
    success, errors = _result_summary(result)
    return CompletionContext(
        invocation=invocation,
        success=success,
        duration_ms=_elapsed_ms(started),
        errors=errors,
        error_categories=_result_error_categories(result),
    )


def _result_summary(result: object) -> tuple[bool, list[str]]:
    """Infer success and sanitized error summaries from a result value."""
    errors = _sanitize_errors(getattr(result, "errors", []))
    ok_value = getattr(result, "ok", None)
    if isinstance(ok_value, bool):
        return ok_value, errors
    return len(errors) == 0, errors


def _result_error_categories(result: object) -> list[str]:
    """Infer normalized error categories from a result-like object."""
    errors_obj = getattr(result, "errors", [])
    if not isinstance(errors_obj, (list, tuple)):
        return []
    categories: list[str] = []
    for item in errors_obj:
        raw = getattr(item, "category", None)
        category = getattr(raw, "value", raw)
        if category in (None, ""):
            continue
        categories.append(str(category))
    return categories


def _sanitize_errors(errors: object) -> list[str]:
    """Return safe one-line error summaries for logs."""
    if not isinstance(errors, (list, tuple)):
        return []
    summaries: list[str] = []
    for item in errors:
        code = getattr(item, "code", None)
        message = getattr(item, "message", None)
        if message in (None, ""):
            continue
        if code in (None, ""):
            summaries.append(str(message))
        else:
            summaries.append(f"{code}: {message}")
    return summaries


def _invocation_log_context(context: InvocationContext) -> dict[str, object]:
    """Build common structured fields for one invocation event."""
    return {
        fields.EVENT: fields.PUBLIC_API_INVOCATION_EVENT,
        fields.COMPONENT_ID: context.component_id,
        fields.API_NAME: context.api_name,
        **context.references,
    }


def _emit_invocation(
    *,
    concerns: Sequence[PublicApiInstrumentationConcern],
    context: InvocationContext,
    logger: Any | None,
) -> None:
    """Dispatch invocation event to concerns with failure isolation."""
    for concern in concerns:
        try:
            concern.on_invocation(context)
        except Exception as exc:  # noqa: BLE001
            _log_concern_failure(
                logger=logger,
                stage="invocation",
                concern=type(concern).__name__,
                exc=exc,
                invocation=context,
            )


def _emit_completion(
    *,
    concerns: Sequence[PublicApiInstrumentationConcern],
    context: CompletionContext,
    logger: Any | None,
) -> None:
    """Dispatch completion event to concerns with failure isolation."""
    for concern in concerns:
        try:
            concern.on_completion(context)
        except Exception as exc:  # noqa: BLE001
            _log_concern_failure(
                logger=logger,
                stage="completion",
                concern=type(concern).__name__,
                exc=exc,
                invocation=context.invocation,
            )


def _log_concern_failure(
    *,
    logger: Any | None,
    stage: str,
    concern: str,
    exc: Exception,
    invocation: InvocationContext,
) -> None:
    """Best-effort warning log for instrumentation concern hook failures."""
    if logger is None:
        return
    with log_context(
        {
            fields.EVENT: fields.PUBLIC_API_INSTRUMENTATION_FAILURE_EVENT,
            fields.COMPONENT_ID: invocation.component_id,
            fields.API_NAME: invocation.api_name,
            fields.STAGE: stage,
            fields.CONCERN: concern,
            fields.ERRORS: [f"{type(exc).__name__}: {exc}"],
        }
    ):
        logger.warning("Public API instrumentation concern failed")


@lru_cache(maxsize=1)
def _default_concerns() -> tuple[PublicApiInstrumentationConcern, ...]:
    """Build OTel-backed tracing and metrics concerns from configured names."""
    otel = load_settings().observability.public_api.otel
    meter = otel_metrics.get_meter(otel.meter_name)
    return (
        PublicApiTracingConcern(tracer=otel_trace.get_tracer(otel.tracer_name)),
        PublicApiMetricsConcern(
            public_api_calls_total=meter.create_counter(
                name=otel.metric_public_api_calls_total,
                description="Count of public API invocations by component/method/outcome.",
                unit="1",
            ),
            public_api_duration_ms=meter.create_histogram(
                name=otel.metric_public_api_duration_ms,
                description="Public API invocation latency in milliseconds.",
                unit="ms",
            ),
            public_api_errors_total=meter.create_counter(
                name=otel.metric_public_api_errors_total,
                description="Count of public API failures by error category.",
                unit="1",
            ),
        ),
    )
