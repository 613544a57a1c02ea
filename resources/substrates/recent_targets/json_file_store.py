"""JSON-file-backed recent-targets store with atomic replace-on-write."""

from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from packages.ledger_shared.logging import get_logger
from resources.substrates.recent_targets.config import RecentTargetsSettings
from resources.substrates.recent_targets.substrate import RecentTargetsStore

_LOGGER = get_logger(__name__)


class JsonFileRecentTargetsStore(RecentTargetsStore):
    """Persist recent targets as one JSON array of strings.

    The list is advisory pre-fill data, so unreadable or malformed files
    load as empty instead of failing the caller.
    """

    def __init__(self, *, settings: RecentTargetsSettings) -> None:
        self._settings = settings
        self._path = settings.resolved_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[str]:
        """Read stored targets, dropping malformed entries and excess items."""
        if not self._path.exists():
            return []
        try:
            parsed = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            _LOGGER.warning(
                "Ignoring unreadable recent targets file: path=%s exception_type=%s",
                self._path,
                type(exc).__name__,
            )
            return []
        if not isinstance(parsed, list):
            _LOGGER.warning("Ignoring non-list recent targets file: path=%s", self._path)
            return []
        targets = [item for item in parsed if isinstance(item, str) and item.strip()]
        return targets[: self._settings.max_entries]

    def remember(self, target: str) -> list[str]:
        """Insert ``target`` at the front, de-duplicated case-insensitively."""
        normalized = target.strip()
        if normalized == "":
            raise ValueError("target must be non-empty")
        current = [
            item for item in self.load() if item.lower() != normalized.lower()
        ]
        updated = [normalized, *current][: self._settings.max_entries]
        self._write(updated)
        return updated

    def clear(self) -> None:
        """Delete the backing file when present."""
        self._path.unlink(missing_ok=True)

    def _write(self, targets: list[str]) -> None:
        """Write the list through a temp file and an atomic rename."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                prefix=f".{self._settings.temp_prefix}-",
                suffix=".tmp",
                dir=self._path.parent,
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                json.dump(targets, handle)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink(missing_ok=True)
