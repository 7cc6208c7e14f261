"""Plain-text receipt line extraction.

This is heuristic-based and only meant for already-OCR'd text. Summary
lines (subtotal, tax, tip, total) are read first; every other line that
contains an ignore phrase is dropped; what remains is matched against a
few item layouts:

    Burger 12.99              -> qty 1 @ 12.99
    2 Soda 5.00               -> qty 2, line total 5.00
    2x Soda 5.00              -> qty 2, line total 5.00
    Soda 2 @ 2.50             -> qty 2 @ 2.50
    Soda 2 x 2.50 5.00        -> qty 2 @ 2.50 (trailing line total ignored)
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from decimal import Decimal

from lightsplit.domain.money import ZERO
from lightsplit.domain.receipt import NormalizerHints, ParsedItem, ParsedMoneyTotals, ParsedReceipt

from .ignore_phrases import effective_ignore_phrases, is_ignored_line

UNIT_PRICE_PLACES = Decimal("0.0001")

# Lines carrying these are promotions, never printed totals (e.g. "Discount total 3.00").
PROMO_MARKERS = (
    "discount",
    "promo",
    "coupon",
    "save",
    "saving",
    "spend",
    "bogo",
    "% off",
    "member",
    "loyalty",
    "rewards",
)

SUBTOTAL_PATTERN = re.compile(r"\bsub[\s-]?total\b")
TIP_PATTERN = re.compile(r"\b(tip|tips|gratuity)\b")
TAX_PATTERN = re.compile(r"\b(tax|hst|gst|pst|vat)\b")
TOTAL_PATTERN = re.compile(r"\b(total|amount due|balance due)\b")

TRAILING_AMOUNT = re.compile(r"(?P<sign>-)?\$?\s*(?P<amount>\d{1,3}(?:,\d{3})*\.\d{2}|\d+\.\d{2})\s*$")

QTY_AT_UNIT_PATTERN = re.compile(
    r"^(?P<desc>.*?[A-Za-z].*?)\s+(?P<qty>\d+)\s*[xX@]\s*\$?(?P<unit>\d+\.\d{2})(?:\s+\$?\d+\.\d{2})?\s*$"
)
QTY_PREFIX_PATTERN = re.compile(r"^(?P<qty>\d+)\s*[xX]?\s+(?P<desc>.*?[A-Za-z].*?)\s+\$?(?P<price>\d+\.\d{2})\s*$")
SIMPLE_ITEM_PATTERN = re.compile(r"^(?P<desc>.*?[A-Za-z].*?)\s+\$?(?P<price>\d+\.\d{2})\s*$")


def _normalize(line: str) -> str:
    return " ".join(line.lower().split())


def _summary_kind(lower: str) -> str | None:
    """Classify a normalized line as subtotal/tip/tax/total, or None."""
    if any(marker in lower for marker in PROMO_MARKERS):
        return None
    if SUBTOTAL_PATTERN.search(lower):
        return "subtotal"
    if TIP_PATTERN.search(lower):
        return "tip"
    # Lines like "Total tax 1.76" are tax, not the grand total.
    if TAX_PATTERN.search(lower):
        return "tax"
    if TOTAL_PATTERN.search(lower):
        return "total"
    return None


def _trailing_amount(line: str) -> Decimal | None:
    """Return the nonnegative amount at the end of ``line``."""
    match = TRAILING_AMOUNT.search(line)
    if not match or match.group("sign"):
        return None
    return Decimal(match.group("amount").replace(",", ""))


def _clean_description(desc: str) -> str:
    return desc.strip(" .:-\t")


def _parse_item_line(line: str) -> ParsedItem | None:
    """Match ``line`` against the supported item layouts."""
    match = QTY_AT_UNIT_PATTERN.match(line)
    if match:
        description = _clean_description(match.group("desc"))
        if description:
            return ParsedItem(description, int(match.group("qty")), Decimal(match.group("unit")))

    match = QTY_PREFIX_PATTERN.match(line)
    if match and int(match.group("qty")) > 0:
        qty = int(match.group("qty"))
        description = _clean_description(match.group("desc"))
        if description:
            unit_price = (Decimal(match.group("price")) / qty).quantize(UNIT_PRICE_PLACES)
            return ParsedItem(description, qty, unit_price)

    match = SIMPLE_ITEM_PATTERN.match(line)
    if match:
        description = _clean_description(match.group("desc"))
        # "Coupon - 1.00" style lines are negative amounts, not items.
        if description and not match.group("desc").rstrip().endswith("-"):
            return ParsedItem(description, 1, Decimal(match.group("price")))
    return None


def _first_present(*values: Decimal | None) -> Decimal | None:
    for value in values:
        if value is not None:
            return value
    return None


def parse_receipt_text(
    raw_text: str,
    hints: NormalizerHints | None = None,
    extra_ignore_phrases: Iterable[str] = (),
) -> ParsedReceipt:
    """
    Extract items and printed totals from OCR'd receipt text.

    Args:
        raw_text: Receipt text, one printed line per text line
        hints: Optional candidate totals and extra ignore phrases. Candidates
            only fill totals the text did not provide.
        extra_ignore_phrases: Configured phrases added to the default vocabulary

    Returns:
        ParsedReceipt with items in print order
    """
    phrases = effective_ignore_phrases(hints, extra_ignore_phrases)

    items: list[ParsedItem] = []
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    tip: Decimal | None = None
    total: Decimal | None = None

    for raw_line in raw_text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        lower = _normalize(line)

        kind = _summary_kind(lower)
        if kind is not None:
            amount = _trailing_amount(line)
            if amount is None:
                continue
            if kind == "subtotal":
                if subtotal is None:
                    subtotal = amount
            elif kind == "tax":
                # Receipts may print several tax lines (e.g. GST + PST).
                tax = (tax or ZERO) + amount
            elif kind == "tip":
                tip = (tip or ZERO) + amount
            else:
                # The last total printed is the grand total.
                total = amount
            continue

        if is_ignored_line(lower, phrases):
            continue

        item = _parse_item_line(line)
        if item is not None:
            items.append(item)

    if hints is not None:
        subtotal = _first_present(subtotal, hints.candidate_subtotal)
        tax = _first_present(tax, hints.candidate_tax)
        tip = _first_present(tip, hints.candidate_tip)
        total = _first_present(total, hints.candidate_total)

    return ParsedReceipt(
        items=tuple(items),
        totals=ParsedMoneyTotals(subtotal=subtotal, tax=tax, tip=tip, total=total),
        raw_text=raw_text,
    )
