from __future__ import annotations

import pytest

from lightsplit.domain import NormalizerHints
from lightsplit.receipt.ignore_phrases import (
    DEFAULT_IGNORE_PHRASES,
    effective_ignore_phrases,
    is_ignored_line,
    matching_ignore_phrase,
)


def test_default_vocabulary_is_lowercase_and_unique() -> None:
    assert all(phrase == phrase.lower() for phrase in DEFAULT_IGNORE_PHRASES)
    assert len(set(DEFAULT_IGNORE_PHRASES)) == len(DEFAULT_IGNORE_PHRASES)
    assert "pre-discount subtotal" in DEFAULT_IGNORE_PHRASES
    assert "amount due" in DEFAULT_IGNORE_PHRASES


@pytest.mark.parametrize(
    "line",
    [
        "SALES TAX 1.76",
        "Tip 4.40",
        "Gratuity (18%) 5.00",
        "TOTAL 28.14",
        "Amount Due 28.14",
        "Member Savings -2.00",
        "BOGO Chips",
        "20% OFF Produce",
        "Pre-Discount Subtotal 30.00",
        "Service charge 3.00",
    ],
)
def test_summary_and_promo_lines_are_ignored(line: str) -> None:
    assert is_ignored_line(line)


@pytest.mark.parametrize("line", ["Burger 12.99", "2 Soda 5.00", "Fries 3.99"])
def test_item_lines_are_not_ignored(line: str) -> None:
    assert not is_ignored_line(line)


def test_substring_matching_is_literal() -> None:
    # "tip" also matches inside longer words; matching is a plain substring test.
    assert matching_ignore_phrase("Multipack Water 4.99") == "tip"


def test_hint_phrases_extend_the_defaults() -> None:
    hints = NormalizerHints(ignore_phrases=("  Bag   FEE ", "tax"))
    phrases = effective_ignore_phrases(hints)

    assert phrases[: len(DEFAULT_IGNORE_PHRASES)] == DEFAULT_IGNORE_PHRASES
    assert "bag fee" in phrases
    assert phrases.count("tax") == 1
    assert is_ignored_line("BAG FEE 0.10", phrases)
    assert not is_ignored_line("BAG FEE 0.10")


def test_empty_hint_phrases_keep_the_defaults() -> None:
    assert effective_ignore_phrases(NormalizerHints(ignore_phrases=())) == DEFAULT_IGNORE_PHRASES
    assert effective_ignore_phrases(None) == DEFAULT_IGNORE_PHRASES


def test_configured_extras_come_before_hint_phrases() -> None:
    hints = NormalizerHints(ignore_phrases=("deposit",))
    phrases = effective_ignore_phrases(hints, extra=("club card", ""))

    assert phrases[-2:] == ("club card", "deposit")
