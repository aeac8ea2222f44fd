"""Unit tests for the scan query value object."""

from __future__ import annotations

import pytest

from rpgmaker_scraper.domain.query import Query, ScanMode


def test_describe_pads_identifier_to_three_digits() -> None:
    assert Query(ScanMode.VARIABLES, 5).describe() == "variable #005"
    assert Query(ScanMode.SWITCHES, 1234).describe() == "switch #1234"


@pytest.mark.parametrize("target_id", [-1, True, "5"])
def test_query_rejects_invalid_identifiers(target_id: object) -> None:
    with pytest.raises(ValueError):
        Query(ScanMode.VARIABLES, target_id)  # type: ignore[arg-type]


def test_query_accepts_reserved_zero() -> None:
    assert Query(ScanMode.SWITCHES, 0).target_id == 0
