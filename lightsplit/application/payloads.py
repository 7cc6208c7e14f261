"""Conversion between JSON payloads and domain objects.

Money values are emitted as strings with two decimals; inputs accept
strings or numbers. Malformed payloads raise ``InvalidInputError`` naming
the offending field.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from lightsplit.domain.errors import InvalidInputError
from lightsplit.domain.money import round2, to_decimal
from lightsplit.domain.receipt import NormalizerHints, ParsedItem, ParsedMoneyTotals, ParsedReceipt, ReconcileResult
from lightsplit.domain.reconcile import AutoAdjustmentPlan
from lightsplit.domain.split import ItemClaim, SplitParticipant, SplitPreview


def _money(value: Decimal) -> str:
    return f"{round2(value):.2f}"


def _optional_money(value: Decimal | None) -> str | None:
    return _money(value) if value is not None else None


def _require_mapping(data: Any, field: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidInputError(f"{field} must be an object", field=field)
    return data


def _require_list(data: Any, field: str) -> Sequence[Any]:
    if not isinstance(data, list):
        raise InvalidInputError(f"{field} must be a list", field=field)
    return data


def _decimal_field(data: Mapping[str, Any], key: str, field: str) -> Decimal:
    if key not in data or data[key] is None:
        raise InvalidInputError(f"{field} is required", field=field)
    try:
        return to_decimal(data[key])
    except ValueError as exc:
        raise InvalidInputError(f"{field} must be a number, got {data[key]!r}", field=field) from exc


def _optional_decimal_field(data: Mapping[str, Any], key: str, field: str) -> Decimal | None:
    if data.get(key) is None:
        return None
    return _decimal_field(data, key, field)


def _int_field(data: Mapping[str, Any], key: str, field: str, default: int | None = None) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{field} must be an integer, got {value!r}", field=field)
    return value


def _str_field(data: Mapping[str, Any], key: str, field: str, default: str | None = None) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise InvalidInputError(f"{field} must be a string", field=field)
    return value


def receipt_from_payload(data: Any) -> ParsedReceipt:
    """Build a ParsedReceipt from ``{"items": [...], "totals": {...}, "raw_text": "..."}``."""
    data = _require_mapping(data, "receipt")
    items: list[ParsedItem] = []
    for idx, raw_item in enumerate(_require_list(data.get("items", []), "items")):
        item = _require_mapping(raw_item, f"items[{idx}]")
        items.append(
            ParsedItem(
                description=_str_field(item, "description", f"items[{idx}].description", default=""),
                qty=_int_field(item, "qty", f"items[{idx}].qty", default=1),
                unit_price=_decimal_field(item, "unit_price", f"items[{idx}].unit_price"),
            )
        )

    totals = _require_mapping(data.get("totals", {}), "totals")
    return ParsedReceipt(
        items=tuple(items),
        totals=ParsedMoneyTotals(
            subtotal=_optional_decimal_field(totals, "subtotal", "totals.subtotal"),
            tax=_optional_decimal_field(totals, "tax", "totals.tax"),
            tip=_optional_decimal_field(totals, "tip", "totals.tip"),
            total=_optional_decimal_field(totals, "total", "totals.total"),
        ),
        raw_text=_str_field(data, "raw_text", "raw_text", default=""),
    )


def hints_from_payload(data: Any) -> NormalizerHints | None:
    if data is None:
        return None
    data = _require_mapping(data, "hints")
    phrases: tuple[str, ...] | None = None
    if data.get("ignore_phrases") is not None:
        raw_phrases = _require_list(data["ignore_phrases"], "hints.ignore_phrases")
        if not all(isinstance(p, str) for p in raw_phrases):
            raise InvalidInputError("hints.ignore_phrases must be a list of strings", field="hints.ignore_phrases")
        phrases = tuple(raw_phrases)
    return NormalizerHints(
        currency=_str_field(data, "currency", "hints.currency", default="USD"),
        candidate_subtotal=_optional_decimal_field(data, "candidate_subtotal", "hints.candidate_subtotal"),
        candidate_tax=_optional_decimal_field(data, "candidate_tax", "hints.candidate_tax"),
        candidate_tip=_optional_decimal_field(data, "candidate_tip", "hints.candidate_tip"),
        candidate_total=_optional_decimal_field(data, "candidate_total", "hints.candidate_total"),
        merchant_name=data.get("merchant_name"),
        datetime_iso=data.get("datetime_iso"),
        ignore_phrases=phrases,
    )


def participants_from_payload(data: Any) -> tuple[SplitParticipant, ...]:
    participants: list[SplitParticipant] = []
    for idx, raw in enumerate(_require_list(data, "participants")):
        entry = _require_mapping(raw, f"participants[{idx}]")
        participant_id = str(entry.get("id", "")).strip()
        if not participant_id:
            raise InvalidInputError(f"participants[{idx}].id is required", field=f"participants[{idx}].id")
        participants.append(
            SplitParticipant(
                participant_id=participant_id,
                display_name=_str_field(entry, "display_name", f"participants[{idx}].display_name", default=participant_id),
                sort_order=_int_field(entry, "sort_order", f"participants[{idx}].sort_order", default=0),
            )
        )
    return tuple(participants)


def claims_from_payload(data: Any) -> tuple[ItemClaim, ...]:
    claims: list[ItemClaim] = []
    for idx, raw in enumerate(_require_list(data, "claims")):
        entry = _require_mapping(raw, f"claims[{idx}]")
        claims.append(
            ItemClaim(
                item_index=_int_field(entry, "item_index", f"claims[{idx}].item_index"),
                participant_id=str(entry.get("participant_id", "")).strip(),
                qty_share=_decimal_field(entry, "qty_share", f"claims[{idx}].qty_share"),
            )
        )
    return tuple(claims)


def receipt_to_payload(receipt: ParsedReceipt) -> dict[str, Any]:
    return {
        "items": [
            {
                "description": item.description,
                "qty": item.qty,
                "unit_price": str(item.unit_price),
                "line_total": _money(item.line_total),
            }
            for item in receipt.items
        ],
        "totals": {
            "subtotal": _optional_money(receipt.totals.subtotal),
            "tax": _optional_money(receipt.totals.tax),
            "tip": _optional_money(receipt.totals.tip),
            "total": _optional_money(receipt.totals.total),
        },
        "raw_text": receipt.raw_text,
    }


def reconcile_result_to_payload(result: ReconcileResult) -> dict[str, Any]:
    return {
        "status": result.status.value,
        "items_sum": _money(result.items_sum),
        "baseline_subtotal": _money(result.baseline_subtotal),
        "discrepancy": _money(result.discrepancy),
        "needs_adjustment": result.needs_adjustment,
        "reason": result.reason,
        "source": result.source.value,
    }


def adjustment_plan_to_payload(plan: AutoAdjustmentPlan) -> dict[str, Any]:
    adjustment = None
    if plan.adjustment is not None:
        adjustment = {
            "label": plan.adjustment.label,
            "amount": _money(plan.adjustment.amount),
            "note": plan.adjustment.note,
        }
    return {"allowed": plan.allowed, "reason": plan.reason, "adjustment": adjustment}


def split_preview_to_payload(preview: SplitPreview) -> dict[str, Any]:
    return {
        "receipt_subtotal": _money(preview.receipt_subtotal),
        "receipt_tax": _money(preview.receipt_tax),
        "receipt_tip": _money(preview.receipt_tip),
        "receipt_total": _money(preview.receipt_total),
        "discount": _money(preview.discount),
        "participants": [
            {
                "participant_id": p.participant_id,
                "display_name": p.display_name,
                "items_subtotal": _money(p.items_subtotal),
                "discount_alloc": _money(p.discount_alloc),
                "tax_alloc": _money(p.tax_alloc),
                "tip_alloc": _money(p.tip_alloc),
                "total": _money(p.total),
            }
            for p in preview.participants
        ],
        "unclaimed_items": [
            {"item_index": u.item_index, "description": u.description, "qty_left": str(u.qty_left)}
            for u in preview.unclaimed_items
        ],
        "unassigned": _money(preview.unassigned),
        "warnings": [
            {
                "component": w.component,
                "amount": _money(w.amount),
                "participant_count": w.participant_count,
                "message": w.message,
            }
            for w in preview.warnings
        ],
        "reconcile": reconcile_result_to_payload(preview.reconcile),
    }
