"""Canonical logging field names for cross-component consistency.

Keeping names centralized prevents drift between components and the
observability integrations that consume the structured output.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
PUBLIC_API_INSTRUMENTATION_FAILURE_EVENT = "public_api_instrumentation_failure"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"
OUTCOME = "outcome"
ERROR_CATEGORY = "error_category"
STAGE = "stage"
CONCERN = "concern"

# Guarded operation fields.
OPERATION_KIND = "operation_kind"
OPERATION_ID = "operation_id"
OPERATION_STATUS = "operation_status"
PRINCIPAL = "principal"
CAPABILITY = "capability"
CACHE_KEY = "cache_key"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
