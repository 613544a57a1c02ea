"""Protocol for the persisted list of recently used operation targets."""

from __future__ import annotations

from typing import Protocol


class RecentTargetsStore(Protocol):
    """Ordered, capped, newest-first list of strings used to pre-fill input."""

    def load(self) -> list[str]:
        """Return stored targets, newest first; empty when nothing is stored."""

    def remember(self, target: str) -> list[str]:
        """Move ``target`` to the front, persist, and return the new list."""

    def clear(self) -> None:
        """Remove every stored target."""
