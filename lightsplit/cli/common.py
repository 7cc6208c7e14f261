"""Shared helpers for CLI command handlers."""

import json
import sys
from pathlib import Path
from typing import Any, NoReturn

from lightsplit.runtime import get_logger

logger = get_logger(__name__)


def fail(message: str) -> NoReturn:
    """Report a command error and exit with status 1."""
    logger.error("%s", message)
    print(f"Error: {message}")
    sys.exit(1)


def read_text_input(source: str) -> str:
    """Read a text file, or stdin when ``source`` is ``-``."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        fail(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def read_json_input(source: str) -> Any:
    """Read and decode a JSON document, or stdin when ``source`` is ``-``."""
    text = read_text_input(source)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        fail(f"Invalid JSON in {source}: {exc.msg} (line {exc.lineno})")


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))
