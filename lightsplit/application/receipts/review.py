"""Receipt review workflow: reconcile, map to a receipt status, plan an auto-adjustment."""

from __future__ import annotations

from dataclasses import dataclass

from lightsplit.domain.receipt import ParsedReceipt, ParseStatus, ReceiptStatus, ReconcileResult, receipt_status_for
from lightsplit.domain.reconcile import AutoAdjustmentPlan, ReconcileOptions, plan_auto_adjustment, reconcile
from lightsplit.runtime import get_logger, load_settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReceiptReview:
    """Outcome shown to the bill owner before the split is finalized."""

    result: ReconcileResult
    receipt_status: ReceiptStatus
    adjustment_plan: AutoAdjustmentPlan


def review_receipt(receipt: ParsedReceipt, options: ReconcileOptions | None = None) -> ReceiptReview:
    """Reconcile ``receipt`` and decide whether the discrepancy may be auto-adjusted.

    Args:
        receipt: Parsed receipt to check
        options: Reconcile caps; defaults to the configured settings
    """
    opts = options if options is not None else load_settings().reconcile
    result = reconcile(receipt, tolerance=opts.tolerance)
    plan = plan_auto_adjustment(result, opts)

    if result.status is ParseStatus.PARSED:
        logger.info(
            "Receipt reconciled: items %s vs %s baseline %s",
            result.items_sum,
            result.source.value,
            result.baseline_subtotal,
        )
    elif result.status is ParseStatus.NEEDS_ADJUSTMENT:
        logger.warning("Receipt needs adjustment: %s (auto-adjust: %s)", result.reason, plan.reason)
    else:
        logger.warning("Receipt could not be reconciled: %s", result.reason)

    return ReceiptReview(
        result=result,
        receipt_status=receipt_status_for(result),
        adjustment_plan=plan,
    )
