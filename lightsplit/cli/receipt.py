"""Receipt command handlers used by the unified CLI."""

import argparse
from pathlib import Path

from lightsplit.application.payloads import (
    adjustment_plan_to_payload,
    hints_from_payload,
    receipt_from_payload,
    receipt_to_payload,
    reconcile_result_to_payload,
)
from lightsplit.application.receipts import parse_receipt, review_receipt
from lightsplit.domain.receipt import NormalizerHints, ParsedReceipt
from lightsplit.receipt.formatter import format_parsed_receipt, format_reconcile_result
from lightsplit.runtime import get_logger, load_settings

from .common import fail, print_json, read_json_input, read_text_input

logger = get_logger(__name__)


def _hints_from_args(args: argparse.Namespace) -> NormalizerHints | None:
    phrases = getattr(args, "ignore_phrase", None)
    if not phrases:
        return None
    return NormalizerHints(ignore_phrases=tuple(phrases))


def load_receipt(source: str, args: argparse.Namespace) -> ParsedReceipt:
    """
    Load a receipt from a JSON payload (``.json``) or raw receipt text.

    JSON documents may hold either a receipt payload or ``{"text": ..., "hints": {...}}``.
    """
    settings = load_settings(args.config)
    if Path(source).suffix.lower() != ".json":
        return parse_receipt(read_text_input(source), hints=_hints_from_args(args), settings=settings)

    data = read_json_input(source)
    if isinstance(data, dict) and isinstance(data.get("text"), str):
        return parse_receipt(data["text"], hints=hints_from_payload(data.get("hints")), settings=settings)
    return receipt_from_payload(data)


def cmd_parse(args: argparse.Namespace) -> None:
    """Extract items and totals from receipt text."""
    try:
        receipt = parse_receipt(
            read_text_input(args.text),
            hints=_hints_from_args(args),
            settings=load_settings(args.config),
        )
    except ValueError as exc:
        fail(str(exc))

    if args.json:
        print_json(receipt_to_payload(receipt))
        return
    print(format_parsed_receipt(receipt))


def cmd_reconcile(args: argparse.Namespace) -> None:
    """Reconcile a receipt and show the auto-adjust decision."""
    try:
        receipt = load_receipt(args.receipt, args)
        review = review_receipt(receipt, load_settings(args.config).reconcile)
    except ValueError as exc:
        fail(str(exc))

    if args.json:
        print_json(
            {
                "receipt_status": review.receipt_status.value,
                "reconcile": reconcile_result_to_payload(review.result),
                "auto_adjust": adjustment_plan_to_payload(review.adjustment_plan),
            }
        )
        return
    print(format_reconcile_result(review.result, review.adjustment_plan))
    print(f"Receipt status: {review.receipt_status.value}")


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server."""
    import uvicorn

    from lightsplit.runtime.server import create_app

    try:
        load_settings(args.config)
    except ValueError as exc:
        fail(str(exc))

    print(f"Starting lightsplit server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/receipts/parse | /receipts/reconcile | /splits/preview")
    print("Press Ctrl+C to stop")

    uvicorn.run(create_app(args.config), host=args.host, port=args.port)
