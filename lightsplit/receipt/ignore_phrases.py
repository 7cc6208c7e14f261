"""Vocabulary of phrases that mark a receipt line as a non-item.

A text line containing any phrase as a case-insensitive substring is a
total, promotion, tax, tip or loyalty line and is never extracted as an
item. Per-receipt phrases (``NormalizerHints.ignore_phrases``) and
configured phrases are added to the defaults; they never replace them.
"""

from __future__ import annotations

from collections.abc import Iterable

from lightsplit.domain.receipt import NormalizerHints

DEFAULT_IGNORE_PHRASES: tuple[str, ...] = (
    "pre-discount subtotal",
    "discount total",
    "spend",
    "save",
    "promo",
    "promotion",
    "coupon",
    "member",
    "loyalty",
    "rewards",
    "bogo",
    "% off",
    "tax",
    "sales tax",
    "tip",
    "gratuity",
    "service",
    "total",
    "amount due",
)


def _normalize(phrase: str) -> str:
    return " ".join(phrase.lower().split())


def effective_ignore_phrases(
    hints: NormalizerHints | None = None,
    extra: Iterable[str] = (),
) -> tuple[str, ...]:
    """Return defaults + configured extras + hint phrases, lowercased, deduplicated, in that order."""
    phrases: list[str] = []
    seen: set[str] = set()
    hint_phrases: Iterable[str] = (hints.ignore_phrases or ()) if hints is not None else ()
    for source in (DEFAULT_IGNORE_PHRASES, extra, hint_phrases):
        for raw in source:
            phrase = _normalize(str(raw))
            if phrase and phrase not in seen:
                seen.add(phrase)
                phrases.append(phrase)
    return tuple(phrases)


def matching_ignore_phrase(line: str, phrases: Iterable[str] = DEFAULT_IGNORE_PHRASES) -> str | None:
    """Return the first phrase found in ``line``, or None."""
    normalized = _normalize(line)
    for phrase in phrases:
        if phrase in normalized:
            return phrase
    return None


def is_ignored_line(line: str, phrases: Iterable[str] = DEFAULT_IGNORE_PHRASES) -> bool:
    """True when ``line`` must be excluded from item extraction."""
    return matching_ignore_phrase(line, phrases) is not None
