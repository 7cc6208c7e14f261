"""Receipt text parse workflow."""

from __future__ import annotations

from lightsplit.domain.receipt import NormalizerHints, ParsedReceipt
from lightsplit.receipt.text_parser import parse_receipt_text
from lightsplit.runtime import Settings, get_logger, load_settings

logger = get_logger(__name__)


def parse_receipt(
    raw_text: str,
    hints: NormalizerHints | None = None,
    settings: Settings | None = None,
) -> ParsedReceipt:
    """Parse receipt text using the configured ignore vocabulary."""
    settings = settings if settings is not None else load_settings()
    receipt = parse_receipt_text(raw_text, hints=hints, extra_ignore_phrases=settings.extra_ignore_phrases)
    logger.debug(
        "Parsed %d items; totals subtotal=%s tax=%s tip=%s total=%s",
        len(receipt.items),
        receipt.totals.subtotal,
        receipt.totals.tax,
        receipt.totals.tip,
        receipt.totals.total,
    )
    if not receipt.items:
        logger.warning("No item lines found in receipt text")
    return receipt
