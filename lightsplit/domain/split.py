"""Data models for splitting a receipt between participants."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from lightsplit.domain.money import ZERO
from lightsplit.domain.receipt import ReconcileResult


@dataclass
class MutableTotal:
    """Per-participant accumulator, owned by the caller driving one allocation pass."""

    participant_id: str
    display_name: str = ""
    items_subtotal: Decimal = ZERO
    discount_alloc: Decimal = ZERO
    tax_alloc: Decimal = ZERO
    tip_alloc: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.items_subtotal - self.discount_alloc + self.tax_alloc + self.tip_alloc


@dataclass(frozen=True)
class ParticipantAllocation:
    discount_alloc: Decimal
    tax_alloc: Decimal
    tip_alloc: Decimal


@dataclass(frozen=True)
class AllocationWarning:
    """An amount that could not be prorated and was split equally instead."""

    component: str  # "discount", "tax", "tip" or "item"
    amount: Decimal
    participant_count: int
    message: str


@dataclass(frozen=True)
class AllocationResult:
    allocations: dict[str, ParticipantAllocation]
    warnings: tuple[AllocationWarning, ...] = ()


@dataclass(frozen=True)
class SplitParticipant:
    participant_id: str
    display_name: str
    sort_order: int = 0


@dataclass(frozen=True)
class ItemClaim:
    """A participant's share of one receipt item, in units of the item's quantity."""

    item_index: int
    participant_id: str
    qty_share: Decimal


@dataclass(frozen=True)
class UnclaimedItem:
    item_index: int
    description: str
    qty_left: Decimal


@dataclass(frozen=True)
class SplitParticipantTotal:
    participant_id: str
    display_name: str
    items_subtotal: Decimal
    discount_alloc: Decimal
    tax_alloc: Decimal
    tip_alloc: Decimal
    total: Decimal


@dataclass(frozen=True)
class SplitPreview:
    """What everyone owes for one receipt, before the split is finalized."""

    receipt_subtotal: Decimal
    receipt_tax: Decimal
    receipt_tip: Decimal
    receipt_total: Decimal
    discount: Decimal
    participants: tuple[SplitParticipantTotal, ...]
    reconcile: ReconcileResult
    unclaimed_items: tuple[UnclaimedItem, ...] = ()
    # receipt_total minus everything assigned to participants
    unassigned: Decimal = ZERO
    warnings: tuple[AllocationWarning, ...] = field(default_factory=tuple)
