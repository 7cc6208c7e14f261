"""Receipt reconciliation: do the parsed line items add up to the printed totals?

The calculator is a pure function of a ``ParsedReceipt``. It never raises for
malformed totals; missing or non-finite totals degrade to ``FailedParse``.

The auto-adjust policy decides whether a small remaining discrepancy may be
absorbed by a synthetic adjustment line instead of asking the bill owner.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from lightsplit.domain.money import DEFAULT_TOLERANCE, ZERO, equals_within, format_money, in_money_range, round2
from lightsplit.domain.receipt import (
    BaselineSource,
    ParsedMoneyTotals,
    ParsedReceipt,
    ParseStatus,
    ReconcileResult,
)

AUTO_ADJUST_LABEL = "Adjustment"
ROUNDING_ADJUST_LABEL = "Rounding Adjustment"
AUTO_ADJUST_NOTE = "Auto-reconcile"

NO_TOTALS_REASON = "no totals found"


def _usable(value: Decimal | None) -> Decimal | None:
    """Treat NaN/Infinity and out-of-range amounts the same as a missing total."""
    if value is None or not in_money_range(value):
        return None
    return value


def _baseline(totals: ParsedMoneyTotals) -> tuple[Decimal, BaselineSource, str] | None:
    """Pick the comparison baseline in priority order; None when no usable totals exist."""
    subtotal = _usable(totals.subtotal)
    if subtotal is not None and subtotal > 0:
        return subtotal, BaselineSource.SUBTOTAL, "subtotal"

    total = _usable(totals.total)
    if total is None:
        return None

    tax = _usable(totals.tax)
    tip = _usable(totals.tip)
    if tax is None and tip is None:
        return total, BaselineSource.TOTAL, "total"

    derived = round2(total - (tax or ZERO) - (tip or ZERO))
    return derived, BaselineSource.TOTAL, "total less tax and tip"


def reconcile(receipt: ParsedReceipt, tolerance: Decimal = DEFAULT_TOLERANCE) -> ReconcileResult:
    """Compare the sum of line items with the baseline subtotal of ``receipt``."""
    items_sum = round2(sum((item.line_total for item in receipt.items), ZERO))

    picked = _baseline(receipt.totals)
    if picked is None:
        return ReconcileResult(
            status=ParseStatus.FAILED_PARSE,
            items_sum=items_sum,
            baseline_subtotal=ZERO,
            discrepancy=items_sum,
            needs_adjustment=True,
            reason=NO_TOTALS_REASON,
        )

    baseline, source, label = picked
    if baseline < 0:
        return ReconcileResult(
            status=ParseStatus.FAILED_PARSE,
            items_sum=items_sum,
            baseline_subtotal=ZERO,
            discrepancy=items_sum,
            needs_adjustment=True,
            reason=f"tax and tip exceed total ({label} {format_money(baseline)})",
            source=source,
        )

    discrepancy = round2(items_sum - baseline)
    needs_adjustment = not equals_within(items_sum, baseline, tolerance)
    reason = None
    if needs_adjustment:
        reason = (
            f"items sum {format_money(items_sum)} vs {label} {format_money(baseline)}, "
            f"diff {format_money(discrepancy)}"
        )

    return ReconcileResult(
        status=ParseStatus.NEEDS_ADJUSTMENT if needs_adjustment else ParseStatus.PARSED,
        items_sum=items_sum,
        baseline_subtotal=baseline,
        discrepancy=discrepancy,
        needs_adjustment=needs_adjustment,
        reason=reason,
        source=source,
    )


@dataclass(frozen=True)
class ReconcileOptions:
    """Caps and toggles for automatic adjustments."""

    tolerance: Decimal = DEFAULT_TOLERANCE
    # Refuse auto-adjustments when the parse itself failed.
    enable_only_when_parsed: bool = True
    # When False, a printed subtotal must be the baseline.
    allow_without_printed_subtotal: bool = False
    max_abs: Decimal = Decimal("5.00")
    # Relative to the baseline subtotal, e.g. 0.015 = 1.5%.
    max_pct: Decimal = Decimal("0.015")
    # At or under this magnitude the adjustment is labelled a rounding adjustment.
    tiny_rounding: Decimal = Decimal("0.02")


@dataclass(frozen=True)
class AutoAdjustment:
    """Signed line that brings the items sum to the baseline subtotal."""

    label: str
    amount: Decimal
    note: str = AUTO_ADJUST_NOTE


@dataclass(frozen=True)
class AutoAdjustmentPlan:
    allowed: bool
    reason: str
    adjustment: AutoAdjustment | None = None


def can_auto_adjust(result: ReconcileResult, options: ReconcileOptions | None = None) -> tuple[bool, str]:
    """Decide whether an automatic adjustment is permitted.

    Returns:
        ``(allow, reason)`` where reason is one of
        ``"ok"``, ``"status"``, ``"no_subtotal"``, ``"abs_cap"``, ``"pct_cap"``.
    """
    opts = options or ReconcileOptions()
    if opts.enable_only_when_parsed and result.status is ParseStatus.FAILED_PARSE:
        return False, "status"

    has_printed_subtotal = result.source is BaselineSource.SUBTOTAL
    if not opts.allow_without_printed_subtotal and not has_printed_subtotal:
        return False, "no_subtotal"

    delta = abs(result.baseline_subtotal - result.items_sum)
    if delta > opts.max_abs:
        return False, "abs_cap"

    # A non-positive baseline makes the percentage cap meaningless.
    if result.baseline_subtotal > 0 and delta > round2(result.baseline_subtotal * opts.max_pct):
        return False, "pct_cap"
    return True, "ok"


def plan_auto_adjustment(result: ReconcileResult, options: ReconcileOptions | None = None) -> AutoAdjustmentPlan:
    """Build the adjustment line for ``result`` when the policy allows one."""
    opts = options or ReconcileOptions()
    allowed, reason = can_auto_adjust(result, opts)
    if not allowed:
        return AutoAdjustmentPlan(allowed=False, reason=reason)

    delta = round2(result.baseline_subtotal - result.items_sum)
    if delta == 0:
        return AutoAdjustmentPlan(allowed=True, reason="none_needed")

    label = ROUNDING_ADJUST_LABEL if abs(delta) <= opts.tiny_rounding else AUTO_ADJUST_LABEL
    return AutoAdjustmentPlan(
        allowed=True,
        reason=reason,
        adjustment=AutoAdjustment(label=label, amount=delta),
    )
