"""Cache key derivation.

Keys are built from every parameter that affects the cached value, lower
cased and joined with ``_``, so an address typed in different letter case
maps to the same entry: ``cache_key("0xABC...", 2) == "0xabc..._2"``.
"""

from __future__ import annotations

_SEPARATOR = "_"


def cache_key(*parts: object) -> str:
    """Derive one normalized, case-insensitive cache key from query parts."""
    if not parts:
        raise ValueError("cache_key requires at least one part")
    normalized: list[str] = []
    for part in parts:
        if part is None:
            raise ValueError("cache key parts must not be None")
        text = str(part).strip().lower()
        if text == "":
            raise ValueError("cache key parts must be non-empty")
        normalized.append(text)
    return _SEPARATOR.join(normalized)


def normalize_key(key: str) -> str:
    """Normalize a caller-supplied key string the same way ``cache_key`` does.

    Unlike ``cache_key`` this never rejects input; an empty key is an
    ordinary key so cache operations cannot fail on it.
    """
    return str(key).strip().lower()
