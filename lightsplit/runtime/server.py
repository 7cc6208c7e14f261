"""FastAPI server for parsing, reconciling and splitting receipts."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lightsplit.application.payloads import (
    adjustment_plan_to_payload,
    claims_from_payload,
    hints_from_payload,
    participants_from_payload,
    receipt_from_payload,
    receipt_to_payload,
    reconcile_result_to_payload,
    split_preview_to_payload,
)
from lightsplit.application.receipts import parse_receipt, review_receipt
from lightsplit.application.splits import SplitRequest, build_split_preview
from lightsplit.domain.errors import InvalidInputError
from lightsplit.runtime.logging import get_logger
from lightsplit.runtime.settings import Settings, load_settings

logger = get_logger(__name__)


async def _json_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise InvalidInputError("Request body must be valid JSON", field="body") from exc
    if not isinstance(body, dict):
        raise InvalidInputError("Request body must be a JSON object", field="body")
    return body


def _settings(request: Request) -> Settings:
    return load_settings(request.app.state.config_path)


def create_app(config_path: str | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        config_path: Optional settings TOML override; defaults to config/lightsplit.toml
    """
    app = FastAPI(title="lightsplit")
    app.state.config_path = config_path

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            {"status": "error", "message": str(exc), "field": exc.field},
            status_code=422,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    @app.post("/receipts/parse")
    async def parse(request: Request) -> JSONResponse:
        """Extract items and totals from ``{"text": ..., "hints": {...}}``."""
        body = await _json_body(request)
        text = body.get("text")
        if not isinstance(text, str):
            raise InvalidInputError("text must be a string", field="text")

        receipt = parse_receipt(text, hints=hints_from_payload(body.get("hints")), settings=_settings(request))
        return JSONResponse({"status": "ok", "receipt": receipt_to_payload(receipt)})

    @app.post("/receipts/reconcile")
    async def reconcile(request: Request) -> JSONResponse:
        """Reconcile ``{"receipt": {...}}`` and report the auto-adjust decision."""
        body = await _json_body(request)
        receipt = receipt_from_payload(body.get("receipt"))

        review = review_receipt(receipt, _settings(request).reconcile)
        return JSONResponse(
            {
                "status": "ok",
                "receipt_status": review.receipt_status.value,
                "reconcile": reconcile_result_to_payload(review.result),
                "auto_adjust": adjustment_plan_to_payload(review.adjustment_plan),
            }
        )

    @app.post("/splits/preview")
    async def preview_split(request: Request) -> JSONResponse:
        """Compute per-participant totals for ``{"receipt", "participants", "claims"}``."""
        body = await _json_body(request)
        split_request = SplitRequest(
            receipt=receipt_from_payload(body.get("receipt")),
            participants=participants_from_payload(body.get("participants")),
            claims=claims_from_payload(body.get("claims", [])),
        )

        preview = build_split_preview(split_request, _settings(request).reconcile)
        return JSONResponse({"status": "ok", "preview": split_preview_to_payload(preview)})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
