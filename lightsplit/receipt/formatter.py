"""Format reconciliation outcomes and split previews as plain-text reports."""

from __future__ import annotations

from decimal import Decimal

from lightsplit.domain.money import format_money
from lightsplit.domain.receipt import ParsedReceipt, ReconcileResult
from lightsplit.domain.reconcile import AutoAdjustmentPlan
from lightsplit.domain.split import SplitPreview


def _format_columns(rows: list[tuple[str, ...]], indent: str = "  ") -> list[str]:
    """
    Format rows as left-aligned label + right-aligned value columns.

    The first column is padded to the widest label; every other column is
    right-aligned to its widest value.
    """
    if not rows:
        return []

    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
    lines = []
    for row in rows:
        cells = [row[0].ljust(widths[0])]
        cells.extend(cell.rjust(width) for cell, width in zip(row[1:], widths[1:]))
        lines.append((indent + "  ".join(cells)).rstrip())
    return lines


def _money_or_dash(value: Decimal | None) -> str:
    return format_money(value) if value is not None else "-"


def format_parsed_receipt(receipt: ParsedReceipt) -> str:
    """Render parsed items and printed totals."""
    lines = [f"Items ({len(receipt.items)}):"]
    lines.extend(
        _format_columns(
            [
                (item.description, f"{item.qty} x {format_money(item.unit_price)}", format_money(item.line_total))
                for item in receipt.items
            ]
        )
    )
    totals = receipt.totals
    lines.append("Totals:")
    lines.extend(
        _format_columns(
            [
                ("Subtotal", _money_or_dash(totals.subtotal)),
                ("Tax", _money_or_dash(totals.tax)),
                ("Tip", _money_or_dash(totals.tip)),
                ("Total", _money_or_dash(totals.total)),
            ]
        )
    )
    return "\n".join(lines)


def format_reconcile_result(result: ReconcileResult, plan: AutoAdjustmentPlan | None = None) -> str:
    """Render a reconciliation result, plus the auto-adjust decision when given."""
    lines = [
        f"Status: {result.status.value}",
        *_format_columns(
            [
                ("Items sum", format_money(result.items_sum)),
                (f"Baseline ({result.source.value})", format_money(result.baseline_subtotal)),
                ("Discrepancy", format_money(result.discrepancy)),
            ]
        ),
    ]
    if result.reason:
        lines.append(f"Reason: {result.reason}")
    if plan is not None:
        if plan.adjustment is not None:
            lines.append(
                f"Auto-adjust: {plan.adjustment.label} {format_money(plan.adjustment.amount)} "
                f"({plan.adjustment.note})"
            )
        elif plan.allowed:
            lines.append("Auto-adjust: not needed")
        else:
            lines.append(f"Auto-adjust: refused ({plan.reason})")
    return "\n".join(lines)


def format_split_preview(preview: SplitPreview) -> str:
    """Render what each participant owes."""
    rows = [("Participant", "Items", "Discount", "Tax", "Tip", "Total")]
    for p in preview.participants:
        rows.append(
            (
                p.display_name or p.participant_id,
                format_money(p.items_subtotal),
                format_money(-p.discount_alloc),
                format_money(p.tax_alloc),
                format_money(p.tip_alloc),
                format_money(p.total),
            )
        )

    lines = _format_columns(rows, indent="")
    lines.append("")
    lines.extend(
        _format_columns(
            [
                ("Receipt subtotal", format_money(preview.receipt_subtotal)),
                ("Discount", format_money(preview.discount)),
                ("Tax", format_money(preview.receipt_tax)),
                ("Tip", format_money(preview.receipt_tip)),
                ("Receipt total", format_money(preview.receipt_total)),
                ("Unassigned", format_money(preview.unassigned)),
            ],
            indent="",
        )
    )

    if preview.reconcile.needs_adjustment:
        lines.append(f"! Reconciliation: {preview.reconcile.status.value}: {preview.reconcile.reason}")
    for item in preview.unclaimed_items:
        lines.append(f"! Unclaimed: #{item.item_index} {item.description} (qty left {item.qty_left})")
    for warning in preview.warnings:
        lines.append(f"! Allocation fallback: {warning.message}")
    return "\n".join(lines)
