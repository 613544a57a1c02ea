"""Principal address predicates and pydantic field types.

An address is ``0x`` followed by exactly 40 hexadecimal digits. Validity is
purely syntactic: it says nothing about whether the account exists or what it
is allowed to do.
"""

from __future__ import annotations

import re
from typing import Annotated, Final

from pydantic import AfterValidator, BeforeValidator

_ADDRESS_RE: Final[re.Pattern[str]] = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address(value: object) -> bool:
    """Return whether ``value`` is a well-formed ``0x``-prefixed address."""
    return isinstance(value, str) and _ADDRESS_RE.fullmatch(value) is not None


def normalize_address(value: str) -> str:
    """Return the canonical lower-case form of one address.

    Raises ``ValueError`` when the value is not a well-formed address.
    """
    candidate = value.strip()
    if not is_address(candidate):
        raise ValueError(f"invalid address: {value!r}")
    return candidate.lower()


def _strip(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


def _require_address(value: str) -> str:
    if not is_address(value):
        raise ValueError("must be a 0x-prefixed 40 hex digit address")
    return value


Address = Annotated[str, BeforeValidator(_strip), AfterValidator(_require_address)]
"""Pydantic field type accepting one well-formed address (case preserved)."""
