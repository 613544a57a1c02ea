"""Public API for shared Ledger Console configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    ComponentsSettings,
    LedgerSettings,
    LoggingSettings,
    ObservabilitySettings,
    resolve_component_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ComponentsSettings",
    "LedgerSettings",
    "LoggingSettings",
    "ObservabilitySettings",
    "load_settings",
    "resolve_component_settings",
]
