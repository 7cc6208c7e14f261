"""Structured errors raised by the domain layer."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Input that indicates a defect in the calling layer (rejected before computing).

    Reconciliation conditions (mismatched totals, missing totals) are never
    reported through this error; they are values on ``ReconcileResult``.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
