"""Split preview workflow: item claims -> item subtotals -> discount/tax/tip allocation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from lightsplit.domain.allocation import allocate, allocate_amount
from lightsplit.domain.errors import InvalidInputError
from lightsplit.domain.money import ZERO, in_money_range, round2
from lightsplit.domain.receipt import ParsedReceipt, ParseStatus
from lightsplit.domain.reconcile import ReconcileOptions, reconcile
from lightsplit.domain.split import (
    AllocationWarning,
    ItemClaim,
    MutableTotal,
    SplitParticipant,
    SplitParticipantTotal,
    SplitPreview,
    UnclaimedItem,
)
from lightsplit.runtime import get_logger, load_settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class SplitRequest:
    """Inputs for previewing one split."""

    receipt: ParsedReceipt
    participants: tuple[SplitParticipant, ...]
    claims: tuple[ItemClaim, ...] = ()


def _order_participants(participants: tuple[SplitParticipant, ...]) -> dict[str, MutableTotal]:
    """Create accumulators in the deterministic (sort_order, id) order."""
    if not participants:
        raise InvalidInputError("A split needs at least one participant", field="participants")

    totals: dict[str, MutableTotal] = {}
    for participant in sorted(participants, key=lambda p: (p.sort_order, p.participant_id)):
        if participant.participant_id in totals:
            raise InvalidInputError(
                f"Duplicate participant id: {participant.participant_id}",
                field="participant_id",
            )
        totals[participant.participant_id] = MutableTotal(
            participant_id=participant.participant_id,
            display_name=participant.display_name,
        )
    return totals


def _group_claims(
    receipt: ParsedReceipt,
    claims: tuple[ItemClaim, ...],
    totals: dict[str, MutableTotal],
) -> dict[int, list[ItemClaim]]:
    """Validate claims and group them per item, in participant order."""
    position = {participant_id: idx for idx, participant_id in enumerate(totals)}
    by_item: dict[int, list[ItemClaim]] = {}
    for claim in claims:
        if not 0 <= claim.item_index < len(receipt.items):
            raise InvalidInputError(f"Claim references unknown item #{claim.item_index}", field="item_index")
        if claim.participant_id not in totals:
            raise InvalidInputError(
                f"Claim references unknown participant: {claim.participant_id}",
                field="participant_id",
            )
        if not in_money_range(claim.qty_share) or claim.qty_share < 0:
            raise InvalidInputError(
                f"Claim share must be a nonnegative number in range, got {claim.qty_share} for item #{claim.item_index}",
                field="qty_share",
            )
        by_item.setdefault(claim.item_index, []).append(claim)

    for item_claims in by_item.values():
        # Stable sort keeps repeated claims by one participant in input order.
        item_claims.sort(key=lambda c: position[c.participant_id])
    return by_item


def _component(value: Decimal | None) -> Decimal:
    if value is None or not value.is_finite():
        return ZERO
    return value


def build_split_preview(request: SplitRequest, options: ReconcileOptions | None = None) -> SplitPreview:
    """
    Compute what each participant owes for ``request.receipt``.

    Each item's line total is split across its claimants by qty share; items
    nobody fully claimed are reported. Discount (items sum above the baseline
    subtotal), tax and tip are then prorated by item subtotal.

    Raises:
        InvalidInputError: Bad participants or claims, or tax/tip that is negative,
            out of range, or not whole cents.
    """
    opts = options if options is not None else load_settings().reconcile
    receipt = request.receipt
    totals = _order_participants(request.participants)
    claims_by_item = _group_claims(receipt, request.claims, totals)

    unclaimed: list[UnclaimedItem] = []
    for idx, item in enumerate(receipt.items):
        item_claims = claims_by_item.get(idx, [])
        claimed = sum((c.qty_share for c in item_claims), Decimal(0))
        left = item.qty - claimed
        if left > 0:
            unclaimed.append(UnclaimedItem(item_index=idx, description=item.description, qty_left=left))
        elif left < 0:
            logger.warning("Item #%d '%s' claimed %s of %s units", idx, item.description, claimed, item.qty)
        if claimed <= 0:
            continue

        shares, _ = allocate_amount(item.line_total, [c.qty_share for c in item_claims], component="item")
        for claim, share in zip(item_claims, shares):
            totals[claim.participant_id].items_subtotal += share

    result = reconcile(receipt, tolerance=opts.tolerance)
    if result.status is ParseStatus.FAILED_PARSE:
        receipt_subtotal = result.items_sum
        logger.warning("Splitting against the items sum: %s", result.reason)
    else:
        receipt_subtotal = result.baseline_subtotal
        if result.needs_adjustment:
            logger.warning("Splitting a receipt that needs adjustment: %s", result.reason)

    discount = max(round2(result.items_sum - receipt_subtotal), ZERO)
    tax = _component(receipt.totals.tax)
    tip = _component(receipt.totals.tip)

    participants = list(totals.values())
    allocation = allocate(participants, discount=discount, tax=tax, tip=tip)
    warnings: tuple[AllocationWarning, ...] = allocation.warnings
    for warning in warnings:
        logger.warning("Allocation fallback: %s", warning.message)

    rows = tuple(
        SplitParticipantTotal(
            participant_id=t.participant_id,
            display_name=t.display_name,
            items_subtotal=t.items_subtotal,
            discount_alloc=t.discount_alloc,
            tax_alloc=t.tax_alloc,
            tip_alloc=t.tip_alloc,
            total=round2(t.total),
        )
        for t in participants
    )

    receipt_total = round2(receipt_subtotal + round2(tax) + round2(tip))
    unassigned = round2(receipt_total - sum((row.total for row in rows), ZERO))
    if unassigned != 0:
        logger.info("Unassigned amount after split: %s", unassigned)

    return SplitPreview(
        receipt_subtotal=receipt_subtotal,
        receipt_tax=round2(tax),
        receipt_tip=round2(tip),
        receipt_total=receipt_total,
        discount=discount,
        participants=rows,
        reconcile=result,
        unclaimed_items=tuple(unclaimed),
        unassigned=unassigned,
        warnings=warnings,
    )
