"""Payload validation helpers for guarded operations.

Validation is synchronous and local: a pydantic model parses the raw input
and optional predicates check cross-field rules. Any failure is raised as
``ValueError`` before the remote boundary is touched.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Returns an error message when the payload is rejected, else ``None``.
Predicate = Callable[[Any], str | None]


def payload_validator(
    model: type[ModelT],
    predicates: Sequence[Predicate] = (),
) -> Callable[[Any], ModelT]:
    """Build a validate function parsing ``model`` then applying predicates."""

    def validate(payload: Any) -> ModelT:
        if isinstance(payload, model):
            parsed = payload
        else:
            parsed = model.model_validate(payload)
        for predicate in predicates:
            problem = predicate(parsed)
            if problem:
                raise ValueError(problem)
        return parsed

    return validate


def describe_validation_error(exc: Exception) -> str:
    """Return a one-line message for a validation failure.

    Exceptions other than ``ValueError`` come from a broken validator rather
    than a rejected payload and are prefixed with their type.
    """
    if isinstance(exc, ValidationError):
        parts = []
        for error in exc.errors():
            location = ".".join(str(item) for item in error.get("loc", ()))
            message = str(error.get("msg", "invalid value"))
            parts.append(f"{location}: {message}" if location else message)
        return "; ".join(parts)
    if not isinstance(exc, ValueError):
        return f"{type(exc).__name__}: {exc}"
    return str(exc) or "invalid payload"
