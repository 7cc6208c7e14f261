"""Runtime infrastructure for lightsplit.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Settings loading via load_settings()

Usage:
    from lightsplit.runtime import get_logger, get_paths, load_settings

    logger = get_logger(__name__)
    settings = load_settings()
    print(get_paths().settings, settings.reconcile.tolerance)
"""

from lightsplit.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from lightsplit.runtime.paths import (
    ProjectPaths,
    get_paths,
    reset_paths,
)
from lightsplit.runtime.settings import Settings, load_settings

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
    # Settings
    "Settings",
    "load_settings",
]
