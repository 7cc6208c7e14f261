"""Centralized path management for lightsplit.

The project root is ``$LIGHTSPLIT_HOME`` when set, otherwise the current
working directory at first use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory."""
    env_home = os.environ.get("LIGHTSPLIT_HOME")
    if env_home:
        return Path(env_home).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        # Ensure root is resolved to absolute path
        self.root = self.root.resolve()

    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def settings(self) -> Path:
        """Reconciliation/parsing settings TOML file."""
        return self.config / "lightsplit.toml"


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached paths so the next get_paths() re-reads the environment."""
    global _paths
    _paths = None
