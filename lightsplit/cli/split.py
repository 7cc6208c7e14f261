"""Split command handler used by the unified CLI."""

import argparse

from lightsplit.application.payloads import (
    claims_from_payload,
    hints_from_payload,
    participants_from_payload,
    receipt_from_payload,
    split_preview_to_payload,
)
from lightsplit.application.receipts import parse_receipt
from lightsplit.application.splits import SplitRequest, build_split_preview
from lightsplit.domain.errors import InvalidInputError
from lightsplit.receipt.formatter import format_split_preview
from lightsplit.runtime import load_settings

from .common import fail, print_json, read_json_input


def _split_request(data: object, args: argparse.Namespace) -> SplitRequest:
    """
    Build a SplitRequest from a split document.

    The document holds ``participants``, ``claims`` and either ``receipt``
    (a receipt payload) or ``receipt_text`` (raw text to parse first).
    """
    if not isinstance(data, dict):
        raise InvalidInputError("split document must be an object", field="split")

    if isinstance(data.get("receipt_text"), str):
        receipt = parse_receipt(
            data["receipt_text"],
            hints=hints_from_payload(data.get("hints")),
            settings=load_settings(args.config),
        )
    else:
        receipt = receipt_from_payload(data.get("receipt"))

    return SplitRequest(
        receipt=receipt,
        participants=participants_from_payload(data.get("participants")),
        claims=claims_from_payload(data.get("claims", [])),
    )


def cmd_split(args: argparse.Namespace) -> None:
    """Preview what each participant owes."""
    data = read_json_input(args.split)
    try:
        preview = build_split_preview(_split_request(data, args), load_settings(args.config).reconcile)
    except ValueError as exc:
        fail(str(exc))

    if args.json:
        print_json(split_preview_to_payload(preview))
        return
    print(format_split_preview(preview))
