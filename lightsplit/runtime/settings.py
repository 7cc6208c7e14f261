"""Runtime loader for reconciliation and parsing settings.

Example ``config/lightsplit.toml``:

    [reconcile]
    tolerance = "0.02"
    enable_only_when_parsed = true
    allow_without_printed_subtotal = false
    max_abs = "5.00"
    max_pct = "0.015"
    tiny_rounding = "0.02"

    [parsing]
    ignore_phrases = ["club card", "bag fee"]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any

from lightsplit.domain.money import to_decimal
from lightsplit.domain.reconcile import ReconcileOptions
from lightsplit.runtime.logging import get_logger
from lightsplit.runtime.paths import get_paths

logger = get_logger(__name__)

_DECIMAL_KEYS = ("tolerance", "max_abs", "max_pct", "tiny_rounding")
_BOOL_KEYS = ("enable_only_when_parsed", "allow_without_printed_subtotal")


@dataclass(frozen=True)
class Settings:
    reconcile: ReconcileOptions = field(default_factory=ReconcileOptions)
    # Added to the default ignore vocabulary.
    extra_ignore_phrases: tuple[str, ...] = ()


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        logger.debug("Settings file not found, using defaults: %s", path)
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


def _parse_reconcile(section: Any, path: Path) -> ReconcileOptions:
    if not isinstance(section, dict):
        raise ValueError(f"[reconcile] must be a table in {path}")

    values: dict[str, Any] = {}
    for key in _DECIMAL_KEYS:
        if key not in section:
            continue
        try:
            value: Decimal = to_decimal(section[key])
        except ValueError as exc:
            raise ValueError(f"reconcile.{key} must be a number in {path}") from exc
        if not value.is_finite() or value < 0:
            raise ValueError(f"reconcile.{key} must be a nonnegative number in {path}")
        values[key] = value

    for key in _BOOL_KEYS:
        if key not in section:
            continue
        if not isinstance(section[key], bool):
            raise ValueError(f"reconcile.{key} must be true or false in {path}")
        values[key] = section[key]

    unknown = sorted(set(section) - set(_DECIMAL_KEYS) - set(_BOOL_KEYS))
    if unknown:
        logger.warning("Ignoring unknown reconcile settings in %s: %s", path, ", ".join(unknown))
    return ReconcileOptions(**values)


def _parse_ignore_phrases(section: Any, path: Path) -> tuple[str, ...]:
    if not isinstance(section, dict):
        raise ValueError(f"[parsing] must be a table in {path}")
    raw = section.get("ignore_phrases", [])
    if not isinstance(raw, list) or not all(isinstance(v, str) for v in raw):
        raise ValueError(f"parsing.ignore_phrases must be a list of strings in {path}")
    return tuple(v.strip() for v in raw if v.strip())


@lru_cache(maxsize=4)
def load_settings(config_path: str | None = None) -> Settings:
    """
    Load settings from TOML.

    Args:
        config_path: Optional TOML path override. If None, uses config/lightsplit.toml
            under the project root.

    Returns:
        Settings; defaults for anything the file does not set.

    Raises:
        ValueError: A key has the wrong type or a negative amount.
    """
    path = Path(config_path) if config_path is not None else get_paths().settings
    data = _load_toml(path)

    reconcile = _parse_reconcile(data.get("reconcile", {}), path)
    extra_phrases = _parse_ignore_phrases(data.get("parsing", {}), path)
    logger.debug("Loaded settings from %s (%d extra ignore phrases)", path, len(extra_phrases))
    return Settings(reconcile=reconcile, extra_ignore_phrases=extra_phrases)
