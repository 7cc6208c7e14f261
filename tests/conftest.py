"""Shared pytest fixtures for lightsplit tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from lightsplit.domain import ParsedItem, ParsedMoneyTotals, ParsedReceipt
from lightsplit.runtime import load_settings, reset_paths


@pytest.fixture(autouse=True)
def isolated_project_root(tmp_path, monkeypatch):
    """Point the project root at an empty directory so no real settings leak in."""
    monkeypatch.setenv("LIGHTSPLIT_HOME", str(tmp_path))
    reset_paths()
    load_settings.cache_clear()
    yield tmp_path
    reset_paths()
    load_settings.cache_clear()


@pytest.fixture
def diner_items() -> tuple[ParsedItem, ...]:
    return (
        ParsedItem("Burger", 1, Decimal("12.99")),
        ParsedItem("Fries", 1, Decimal("3.99")),
        ParsedItem("Soda", 2, Decimal("2.50")),
    )


@pytest.fixture
def diner_receipt(diner_items) -> ParsedReceipt:
    return ParsedReceipt(
        items=diner_items,
        totals=ParsedMoneyTotals(
            subtotal=Decimal("21.98"),
            tax=Decimal("1.76"),
            tip=Decimal("4.40"),
            total=Decimal("28.14"),
        ),
    )
