"""Tests for pydantic-settings-backed shared configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from packages.ledger_shared.config import load_settings, resolve_component_settings
from resources.substrates.recent_targets.component import (
    RESOURCE_COMPONENT_ID as RECENT_TARGETS_COMPONENT_ID,
)
from resources.substrates.recent_targets.config import RecentTargetsSettings
from services.action.operation_controller.config import (
    resolve_operation_controller_settings,
)
from services.state.read_cache.component import SERVICE_COMPONENT_ID
from services.state.read_cache.config import ReadCacheSettings


def test_load_settings_uses_ledger_precedence_cascade(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Init params override env, env overrides YAML, then defaults apply."""
    config_file = tmp_path / "ledger.yaml"
    config_file.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "components:",
                "  service:",
                "    read_cache:",
                "      ttl_seconds: 60",
                "  substrate:",
                "    recent_targets:",
                "      max_entries: 3",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("LEDGER_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("LEDGER_COMPONENTS__SERVICE__READ_CACHE__TTL_SECONDS", "120")

    settings = load_settings(
        config_path=config_file,
        logging={"level": "DEBUG"},
    )

    cache = resolve_component_settings(
        settings=settings,
        component_id=str(SERVICE_COMPONENT_ID),
        model=ReadCacheSettings,
    )
    recent = resolve_component_settings(
        settings=settings,
        component_id=str(RECENT_TARGETS_COMPONENT_ID),
        model=RecentTargetsSettings,
    )

    assert settings.logging.level == "DEBUG"
    assert cache.ttl_seconds == 120
    assert recent.max_entries == 3


def test_load_settings_uses_model_defaults_when_sources_missing(tmp_path: Path) -> None:
    """Settings fall back to model defaults when env and YAML are absent."""
    settings = load_settings(config_path=tmp_path / "missing.yaml")
    cache = resolve_component_settings(
        settings=settings,
        component_id=str(SERVICE_COMPONENT_ID),
        model=ReadCacheSettings,
    )
    controller = resolve_operation_controller_settings(settings)

    assert settings.logging.service == "ledger_console"
    assert settings.logging.level == "INFO"
    assert cache.ttl_seconds == 300
    assert controller.history_limit == 5
    assert controller.confirmation_timeout_seconds is None
    assert controller.require_user_confirmation is False


def test_resolve_component_settings_rejects_unknown_kind() -> None:
    """Component ids must carry a known kind prefix."""
    with pytest.raises(ValueError):
        resolve_component_settings(
            settings=load_settings(),
            component_id="widget_read_cache",
            model=ReadCacheSettings,
        )


def test_component_settings_reject_unknown_fields() -> None:
    """Typos in component config are reported instead of ignored."""
    settings = load_settings(
        components={"service": {"read_cache": {"ttl_secs": 10}}},
    )

    with pytest.raises(ValueError):
        resolve_component_settings(
            settings=settings,
            component_id=str(SERVICE_COMPONENT_ID),
            model=ReadCacheSettings,
        )


def test_flat_component_keys_are_rejected() -> None:
    """Component settings must be nested under their kind namespace."""
    with pytest.raises(ValueError):
        load_settings(components={"service_read_cache": {"ttl_seconds": 10}})
