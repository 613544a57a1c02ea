"""Settings loading entrypoints.

The cascade is always:
1) explicit keyword overrides
2) environment variables (``LEDGER_`` prefix, ``__`` nesting)
3) YAML config file (``~/.config/ledger_console/ledger.yaml`` by default)
4) built-in model defaults

Example: ``LEDGER_COMPONENTS__SERVICE__READ_CACHE__TTL_SECONDS=60`` sets
``components.service.read_cache.ttl_seconds``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

from .models import LedgerSettings


def load_settings(
    *,
    config_path: str | Path | None = None,
    **overrides: Any,
) -> LedgerSettings:
    """Load root settings, optionally from a non-default YAML file path."""
    if config_path is None:
        return LedgerSettings(**overrides)

    resolved_path = Path(config_path)

    class _PathScopedSettings(LedgerSettings):
        _config_path: ClassVar[Path] = resolved_path

    return _PathScopedSettings(**overrides)
