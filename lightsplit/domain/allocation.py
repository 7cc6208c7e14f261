"""Proportional allocation of discount, tax and tip to the exact cent.

Each amount is prorated by item-subtotal share, rounded to cents, and the
cents lost or gained by independent rounding are handed out one at a time
by the largest-remainder method. The allocated cents always sum to the
amount. Ties go to the participant that comes first in the caller's order,
so callers must pass a stable ordering (e.g. sorted by id).
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from lightsplit.domain.errors import InvalidInputError
from lightsplit.domain.money import CENT, MAX_AMOUNT, ZERO, format_money, in_money_range, round2
from lightsplit.domain.split import AllocationResult, AllocationWarning, MutableTotal, ParticipantAllocation


def _require_nonnegative(value: Decimal, field: str) -> None:
    if not in_money_range(value) or value < 0:
        raise InvalidInputError(
            f"{field} must be a nonnegative amount below {MAX_AMOUNT:,f}, got {value}",
            field=field,
        )


def _require_whole_cents(value: Decimal, field: str) -> None:
    if value != round2(value):
        raise InvalidInputError(f"{field} has a fraction of a cent: {value}", field=field)


def allocate_amount(
    amount: Decimal,
    weights: Sequence[Decimal],
    component: str = "amount",
) -> tuple[list[Decimal], AllocationWarning | None]:
    """Split ``amount`` across ``weights`` so the cent shares sum exactly to ``amount``.

    ``amount`` must be whole cents. When every weight is zero there is
    nothing to prorate against; the amount is split equally and an
    ``AllocationWarning`` is returned alongside the shares.

    Args:
        amount: Nonnegative whole-cent amount to distribute.
        weights: Nonnegative proration weights, one per participant, in tie-break order.
        component: Name used in error and warning messages.

    Returns:
        ``(shares, warning)`` with one share per weight, in the same order.

    Raises:
        InvalidInputError: Empty weights, a negative or out-of-range amount or weight,
            or an amount with a fraction of a cent.
    """
    if not weights:
        raise InvalidInputError(f"Cannot allocate {component} across zero participants", field=component)
    _require_nonnegative(amount, component)
    _require_whole_cents(amount, component)
    for idx, weight in enumerate(weights):
        _require_nonnegative(weight, f"{component} weight #{idx}")

    count = len(weights)
    if amount == 0:
        return [ZERO] * count, None

    base = sum(weights, ZERO)
    warning = None
    if base == 0:
        raw = [amount / count] * count
        warning = AllocationWarning(
            component=component,
            amount=amount,
            participant_count=count,
            message=(
                f"{component} {format_money(amount)} split equally across {count} participants: "
                "no item subtotal to prorate against"
            ),
        )
    else:
        raw = [amount * weight / base for weight in weights]

    shares = [round2(r) for r in raw]
    drift = round2(amount - sum(shares, ZERO))
    steps = int((abs(drift) / CENT).to_integral_value())
    if steps:
        remainders = [r - s for r, s in zip(raw, shares)]
        if drift > 0:
            order = sorted(range(count), key=lambda i: (-remainders[i], i))
            step = CENT
        else:
            order = sorted(range(count), key=lambda i: (remainders[i], i))
            step = -CENT
        for n in range(steps):
            shares[order[n % count]] += step

    return shares, warning


def allocate(
    participants: Sequence[MutableTotal],
    discount: Decimal = ZERO,
    tax: Decimal = ZERO,
    tip: Decimal = ZERO,
) -> AllocationResult:
    """Prorate discount, tax and tip by ``items_subtotal`` and write them into ``participants``.

    All inputs are validated before any participant is touched.
    """
    if not participants:
        raise InvalidInputError("No participants to allocate across", field="participants")

    seen: set[str] = set()
    for participant in participants:
        if participant.participant_id in seen:
            raise InvalidInputError(
                f"Duplicate participant id: {participant.participant_id}",
                field="participant_id",
            )
        seen.add(participant.participant_id)
        _require_nonnegative(participant.items_subtotal, f"items_subtotal[{participant.participant_id}]")

    _require_nonnegative(discount, "discount")
    _require_nonnegative(tax, "tax")
    _require_nonnegative(tip, "tip")
    for value, field in ((discount, "discount"), (tax, "tax"), (tip, "tip")):
        _require_whole_cents(value, field)

    weights = [p.items_subtotal for p in participants]
    discount_shares, discount_warning = allocate_amount(discount, weights, "discount")
    tax_shares, tax_warning = allocate_amount(tax, weights, "tax")
    tip_shares, tip_warning = allocate_amount(tip, weights, "tip")

    allocations: dict[str, ParticipantAllocation] = {}
    for participant, discount_share, tax_share, tip_share in zip(
        participants, discount_shares, tax_shares, tip_shares
    ):
        participant.discount_alloc = discount_share
        participant.tax_alloc = tax_share
        participant.tip_alloc = tip_share
        allocations[participant.participant_id] = ParticipantAllocation(
            discount_alloc=discount_share,
            tax_alloc=tax_share,
            tip_alloc=tip_share,
        )

    warnings = tuple(w for w in (discount_warning, tax_warning, tip_warning) if w is not None)
    return AllocationResult(allocations=allocations, warnings=warnings)
