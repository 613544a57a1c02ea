"""Operation Controller service: guarded validate/check/submit/confirm flow."""

from services.action.operation_controller.component import SERVICE_COMPONENT_ID
from services.action.operation_controller.config import (
    OperationControllerSettings,
    resolve_operation_controller_settings,
)
from services.action.operation_controller.definition import OperationDefinition
from services.action.operation_controller.domain import (
    OperationError,
    OperationErrorKind,
    OperationRecord,
    OperationSnapshot,
    OperationStatus,
)
from services.action.operation_controller.implementation import (
    GuardedOperationController,
)
from services.action.operation_controller.service import (
    OperationController,
    build_guarded_operation,
)
from services.action.operation_controller.validation import payload_validator

__all__ = [
    "SERVICE_COMPONENT_ID",
    "GuardedOperationController",
    "OperationController",
    "OperationControllerSettings",
    "OperationDefinition",
    "OperationError",
    "OperationErrorKind",
    "OperationRecord",
    "OperationSnapshot",
    "OperationStatus",
    "build_guarded_operation",
    "payload_validator",
    "resolve_operation_controller_settings",
]
