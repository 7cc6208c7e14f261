"""Centralized logging configuration for lightsplit.

Usage:
    from lightsplit.runtime import get_logger
    logger = get_logger(__name__)

    logger.info("Receipt reconciled")
    logger.warning("Allocation fallback: ...")

Reconciliation outcomes and allocation fallbacks are logged by the
application workflows; the domain layer never logs.

Environment variables:
    LIGHTSPLIT_LOG_LEVEL: Level name (DEBUG, INFO, WARNING/WARN, ERROR) or a
        numeric level. Default: INFO
"""

import logging
import os
import sys
from typing import TextIO

DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

LOGGER_NAMESPACE = "lightsplit"

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

# Handler owned by this module; None until configure_logging() runs.
_handler: logging.Handler | None = None


def parse_log_level(value: int | str | None) -> int:
    """Resolve a level name or number; anything unrecognized maps to DEFAULT_LOG_LEVEL."""
    if isinstance(value, int):
        return value
    text = (value or "").strip().upper()
    if text.isdigit():
        return int(text)
    return _LEVEL_NAMES.get(text, DEFAULT_LOG_LEVEL)


def _formatter_for(level: int) -> logging.Formatter:
    # Line numbers only help when debugging.
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | str | None = None, stream: TextIO | None = None) -> None:
    """Attach a single stderr handler to the lightsplit namespace.

    Calling it again is a no-op, so every module can call it on import.

    Args:
        level: Level to use. If None, reads LIGHTSPLIT_LOG_LEVEL.
        stream: Output stream; defaults to sys.stderr.
    """
    global _handler

    if _handler is not None:
        return

    resolved = parse_log_level(level if level is not None else os.environ.get("LIGHTSPLIT_LOG_LEVEL"))

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(_formatter_for(resolved))

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(resolved)
    namespace_logger.addHandler(_handler)
    # Keep lightsplit records out of the host application's root handlers.
    namespace_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the lightsplit namespace.

    Module names (``lightsplit.x.y``) are used as-is; any other name is
    nested under ``lightsplit.``.
    """
    configure_logging()

    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int | str) -> None:
    """Change the namespace level at runtime, switching the format to/from DEBUG."""
    configure_logging()
    resolved = parse_log_level(level)
    logging.getLogger(LOGGER_NAMESPACE).setLevel(resolved)
    if _handler is not None:
        _handler.setFormatter(_formatter_for(resolved))
