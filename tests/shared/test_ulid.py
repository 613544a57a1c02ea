"""Tests for shared ULID encoding and ordering semantics."""

from __future__ import annotations

import pytest

from packages.ledger_shared.ids import (
    generate_ulid_bytes,
    generate_ulid_str,
    ulid_bytes_to_str,
)


def test_ulid_string_is_26_crockford_characters() -> None:
    """Canonical strings use the Crockford alphabet without ambiguous letters."""
    value = generate_ulid_str()

    assert len(value) == 26
    assert set(value) <= set("0123456789ABCDEFGHJKMNPQRSTVWXYZ")


def test_ulid_lexicographic_order_matches_big_endian_binary() -> None:
    """Sorting canonical strings matches sorting binary big-endian ULIDs."""
    values = [generate_ulid_bytes(timestamp_ms=1_700_000_000_000) for _ in range(300)]

    sorted_by_binary = sorted(values)
    sorted_by_string = sorted(values, key=ulid_bytes_to_str)

    assert sorted_by_binary == sorted_by_string


def test_ulid_strings_sort_by_creation_time() -> None:
    """Later timestamps always sort after earlier ones."""
    earlier = generate_ulid_str(timestamp_ms=1_700_000_000_000)
    later = generate_ulid_str(timestamp_ms=1_700_000_000_001)

    assert earlier < later


def test_ulid_helpers_reject_out_of_range_inputs() -> None:
    """Wrong byte lengths and timestamps beyond 48 bits are rejected."""
    with pytest.raises(ValueError):
        ulid_bytes_to_str(b"\x00" * 15)
    with pytest.raises(ValueError):
        generate_ulid_bytes(timestamp_ms=1 << 48)
