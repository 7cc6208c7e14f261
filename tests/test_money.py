from __future__ import annotations

from decimal import Decimal

import pytest

from lightsplit.domain.money import equals_within, format_money, round2, to_decimal


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0.125", "0.13"),
        ("-0.125", "-0.13"),
        ("0.124", "0.12"),
        ("2.675", "2.68"),
        ("10", "10.00"),
        ("-0.005", "-0.01"),
    ],
)
def test_round2_rounds_ties_away_from_zero(value: str, expected: str) -> None:
    assert round2(Decimal(value)) == Decimal(expected)
    assert str(round2(Decimal(value))) == expected


def test_round2_is_idempotent() -> None:
    value = round2(Decimal("3.14159"))
    assert round2(value) == value


def test_equals_within_is_inclusive_at_the_tolerance() -> None:
    assert equals_within(Decimal("21.98"), Decimal("22.00"), Decimal("0.02"))
    assert not equals_within(Decimal("24.97"), Decimal("25.00"), Decimal("0.02"))
    assert equals_within(Decimal("1.00"), Decimal("1.00"), Decimal("0"))


def test_equals_within_uses_default_tolerance() -> None:
    assert equals_within(Decimal("5.00"), Decimal("5.02"))
    assert not equals_within(Decimal("5.00"), Decimal("5.03"))


def test_to_decimal_converts_floats_through_str() -> None:
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("$1,234.50") == Decimal("1234.50")
    assert to_decimal(3) == Decimal("3")


@pytest.mark.parametrize("value", [True, "abc", None, [1]])
def test_to_decimal_rejects_non_numbers(value: object) -> None:
    with pytest.raises(ValueError):
        to_decimal(value)


def test_format_money_signs() -> None:
    assert format_money(Decimal("1.5")) == "$1.50"
    assert format_money(Decimal("-0.03")) == "-$0.03"
    assert format_money(Decimal("-0.001")) == "$0.00"
