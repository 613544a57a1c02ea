"""Tests for structured logging context propagation and formatting."""

from __future__ import annotations

import asyncio
import json
import logging

import pytest

from packages.ledger_shared.config import LoggingSettings
from packages.ledger_shared.logging import (
    bind_context,
    clear_context,
    configure_logging_from_settings,
    get_context,
    get_logger,
    log_context,
)
from packages.ledger_shared.logging.config import ContextFilter, JsonFormatter


@pytest.fixture(autouse=True)
def _clean_context() -> None:
    clear_context()


def test_log_context_binds_and_restores() -> None:
    """Block-scoped context is removed on exit, outer values survive."""
    bind_context(operation_kind="withdraw")

    with log_context({"operation_id": "0xabc", "ignored": None}):
        inside = get_context()

    assert inside == {"operation_kind": "withdraw", "operation_id": "0xabc"}
    assert get_context() == {"operation_kind": "withdraw"}


def test_log_context_restores_after_exception() -> None:
    """Context is restored even when the block raises."""
    with pytest.raises(RuntimeError):
        with log_context({"principal": "0x1"}):
            raise RuntimeError("boom")

    assert get_context() == {}


@pytest.mark.asyncio
async def test_context_is_isolated_per_task() -> None:
    """Concurrent tasks do not see each other's bound fields."""

    async def worker(kind: str) -> dict[str, str]:
        with log_context({"operation_kind": kind}):
            await asyncio.sleep(0)
            return get_context()

    first, second = await asyncio.gather(worker("withdraw"), worker("set_fee"))

    assert first == {"operation_kind": "withdraw"}
    assert second == {"operation_kind": "set_fee"}


def test_json_formatter_includes_bound_context() -> None:
    """JSON log lines carry the structured context fields."""
    record = logging.LogRecord(
        name="ledger.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Operation settled",
        args=(),
        exc_info=None,
    )
    with log_context({"operation_status": "succeeded", "service": "ledger_console"}):
        ContextFilter().filter(record)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Operation settled"
    assert payload["level"] == "INFO"
    assert payload["operation_status"] == "succeeded"
    assert payload["service"] == "ledger_console"


def test_configure_logging_from_settings_writes_plain_lines_to_stdout(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Plain output appends bound context fields after the message."""
    configure_logging_from_settings(
        LoggingSettings(level="DEBUG", json_output=False, environment="test")
    )
    try:
        with log_context({"operation_kind": "withdraw"}):
            get_logger("ledger.test").info("Operation settled")
        line = capsys.readouterr().out.strip().splitlines()[-1]
    finally:
        logging.getLogger().handlers.clear()
        clear_context()

    assert "INFO ledger.test Operation settled" in line
    assert "operation_kind=withdraw" in line
    assert "service=ledger_console" in line
