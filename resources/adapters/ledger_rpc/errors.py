"""Typed exceptions raised by remote ledger boundary implementations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class RemoteBoundaryError(Exception):
    """Base error for failed remote ledger interactions."""

    message: str
    operation: str
    retryable: bool = False
    code: str = ""

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class RemoteReadError(RemoteBoundaryError):
    """A read query failed; callers may retry it later."""

    retryable: bool = True


@dataclass(eq=False)
class RemoteSubmissionError(RemoteBoundaryError):
    """The remote side rejected a state-changing request before accepting it."""


@dataclass(eq=False)
class RemotePollError(RemoteBoundaryError):
    """Receipt status for a submitted operation could not be determined."""

    retryable: bool = True
