"""Canonical rounding and tolerance comparison for monetary values.

Every money value in the project is stored and compared at 2-decimal
precision with round-half-away-from-zero semantics. Never compare money
with exact float equality; use ``equals_within``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
DEFAULT_TOLERANCE = Decimal("0.02")
# Larger magnitudes overflow cent quantization at the default 28-digit context.
MAX_AMOUNT = Decimal("1e15")


def round2(value: Decimal) -> Decimal:
    """Round to 2 fractional digits, ties away from zero (0.125 -> 0.13, -0.125 -> -0.13)."""
    # Decimal's ROUND_HALF_UP rounds ties away from zero for both signs.
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def in_money_range(value: Decimal) -> bool:
    """True for finite values with magnitude below ``MAX_AMOUNT``."""
    return value.is_finite() and abs(value) < MAX_AMOUNT


def equals_within(a: Decimal, b: Decimal, tolerance: Decimal = DEFAULT_TOLERANCE) -> bool:
    """Return True iff ``|a - b| <= tolerance``."""
    return abs(a - b) <= tolerance


def to_decimal(value: object) -> Decimal:
    """Convert a str/int/float/Decimal to Decimal.

    Floats go through ``str`` so 0.1 becomes Decimal("0.1"), not its binary expansion.

    Raises:
        ValueError: value is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a money value: {value!r}")
    if isinstance(value, float):
        value = str(value)
    if isinstance(value, (int, str)):
        try:
            return Decimal(str(value).strip().replace("$", "").replace(",", ""))
        except InvalidOperation as exc:
            raise ValueError(f"Not a money value: {value!r}") from exc
    raise ValueError(f"Not a money value: {value!r}")


def format_money(value: Decimal) -> str:
    """Format as a signed dollar string, e.g. ``$1.50`` or ``-$0.03``."""
    rounded = round2(value)
    if rounded < 0:
        return f"-${-rounded:.2f}"
    return f"${abs(rounded):.2f}"
