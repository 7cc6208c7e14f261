"""Receipt workflows."""

from lightsplit.application.receipts.parse import parse_receipt
from lightsplit.application.receipts.review import ReceiptReview, review_receipt

__all__ = [
    "parse_receipt",
    "ReceiptReview",
    "review_receipt",
]
