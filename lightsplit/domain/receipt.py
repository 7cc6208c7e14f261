"""Data models for parsed receipts and their reconciliation outcome."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from lightsplit.domain.errors import InvalidInputError
from lightsplit.domain.money import in_money_range, round2


class ParseStatus(str, Enum):
    """Whether a parsed receipt is usable as-is, after correction, or not at all."""

    PARSED = "Parsed"
    NEEDS_ADJUSTMENT = "NeedsAdjustment"
    FAILED_PARSE = "FailedParse"


class BaselineSource(str, Enum):
    """Which printed total the comparison baseline was derived from."""

    SUBTOTAL = "Subtotal"
    TOTAL = "Total"


class ReceiptStatus(str, Enum):
    """Lifecycle of a receipt from upload to review."""

    PENDING_PARSE = "PendingParse"
    PARSED = "Parsed"
    PARSED_NEEDS_REVIEW = "ParsedNeedsReview"
    FAILED_PARSE = "FailedParse"


@dataclass(frozen=True)
class ParsedItem:
    """A single line item produced by the parser."""

    description: str
    qty: int
    unit_price: Decimal

    def __post_init__(self) -> None:
        if self.qty < 0:
            raise InvalidInputError(f"Negative quantity for item '{self.description}': {self.qty}", field="qty")
        if not in_money_range(self.unit_price) or self.unit_price < 0:
            raise InvalidInputError(
                f"Invalid unit price for item '{self.description}': {self.unit_price}",
                field="unit_price",
            )
        if not in_money_range(self.qty * self.unit_price):
            raise InvalidInputError(
                f"Line total out of range for item '{self.description}': {self.qty} x {self.unit_price}",
                field="qty",
            )

    @property
    def line_total(self) -> Decimal:
        return round2(self.qty * self.unit_price)


@dataclass(frozen=True)
class ParsedMoneyTotals:
    """Printed totals; any of them may be missing when the parser could not find it."""

    subtotal: Decimal | None = None
    tax: Decimal | None = None
    tip: Decimal | None = None
    total: Decimal | None = None


@dataclass(frozen=True)
class ParsedReceipt:
    """One receipt-parse attempt."""

    items: tuple[ParsedItem, ...] = ()
    totals: ParsedMoneyTotals = field(default_factory=ParsedMoneyTotals)
    raw_text: str = ""

    def __post_init__(self) -> None:
        # Accept any sequence from callers but keep the stored value immutable.
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class NormalizerHints:
    """Guidance handed to the line extractor.

    ``ignore_phrases`` extends the default ignore vocabulary; it never replaces it.
    """

    currency: str = "USD"
    candidate_subtotal: Decimal | None = None
    candidate_tax: Decimal | None = None
    candidate_tip: Decimal | None = None
    candidate_total: Decimal | None = None
    merchant_name: str | None = None
    datetime_iso: str | None = None
    ignore_phrases: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of comparing the items sum with the receipt's baseline subtotal."""

    status: ParseStatus
    items_sum: Decimal
    baseline_subtotal: Decimal
    discrepancy: Decimal
    needs_adjustment: bool
    reason: str | None = None
    source: BaselineSource = BaselineSource.SUBTOTAL


def receipt_status_for(result: ReconcileResult) -> ReceiptStatus:
    """Map a reconciliation outcome onto the receipt lifecycle."""
    if result.status is ParseStatus.PARSED:
        return ReceiptStatus.PARSED
    if result.status is ParseStatus.NEEDS_ADJUSTMENT:
        return ReceiptStatus.PARSED_NEEDS_REVIEW
    return ReceiptStatus.FAILED_PARSE
