"""Public shared error API for Ledger Console components."""

from . import codes
from .factories import (
    dependency_error,
    internal_error,
    policy_error,
    validation_error,
)
from .normalize import exception_to_error
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "ErrorCategory",
    "ErrorDetail",
    "codes",
    "dependency_error",
    "exception_to_error",
    "internal_error",
    "policy_error",
    "validation_error",
]
