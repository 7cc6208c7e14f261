"""Core domain models and computations for lightsplit.

This package is pure: no I/O, no logging, no runtime configuration.
- money: round2 / equals_within
- receipt: ParsedItem, ParsedMoneyTotals, ParsedReceipt, ReconcileResult, ...
- reconcile: reconcile(), auto-adjust policy
- allocation: allocate(), allocate_amount()

Usage:
    from lightsplit.domain import ParsedReceipt, reconcile, allocate
"""

from lightsplit.domain.allocation import allocate, allocate_amount
from lightsplit.domain.errors import InvalidInputError
from lightsplit.domain.money import DEFAULT_TOLERANCE, equals_within, round2
from lightsplit.domain.receipt import (
    BaselineSource,
    NormalizerHints,
    ParsedItem,
    ParsedMoneyTotals,
    ParsedReceipt,
    ParseStatus,
    ReceiptStatus,
    ReconcileResult,
    receipt_status_for,
)
from lightsplit.domain.reconcile import (
    AutoAdjustment,
    AutoAdjustmentPlan,
    ReconcileOptions,
    can_auto_adjust,
    plan_auto_adjustment,
    reconcile,
)
from lightsplit.domain.split import (
    AllocationResult,
    AllocationWarning,
    ItemClaim,
    MutableTotal,
    ParticipantAllocation,
    SplitParticipant,
    SplitParticipantTotal,
    SplitPreview,
    UnclaimedItem,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "AllocationResult",
    "AllocationWarning",
    "AutoAdjustment",
    "AutoAdjustmentPlan",
    "BaselineSource",
    "InvalidInputError",
    "ItemClaim",
    "MutableTotal",
    "NormalizerHints",
    "ParseStatus",
    "ParsedItem",
    "ParsedMoneyTotals",
    "ParsedReceipt",
    "ParticipantAllocation",
    "ReceiptStatus",
    "ReconcileOptions",
    "ReconcileResult",
    "SplitParticipant",
    "SplitParticipantTotal",
    "SplitPreview",
    "UnclaimedItem",
    "allocate",
    "allocate_amount",
    "can_auto_adjust",
    "equals_within",
    "plan_auto_adjustment",
    "receipt_status_for",
    "reconcile",
    "round2",
]
