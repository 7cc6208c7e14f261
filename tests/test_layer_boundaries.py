"""Architecture boundary checks between lightsplit layers."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

_PACKAGE_DIR = Path(__file__).resolve().parents[1] / "lightsplit"

_ALLOWED_LAYERS = {
    "domain": {"domain"},
    "receipt": {"domain", "receipt"},
    "application": {"domain", "receipt", "application", "runtime"},
    "runtime": {"domain", "receipt", "application", "runtime"},
}


def _module_parts(path: Path) -> list[str]:
    parts = list(path.relative_to(_PACKAGE_DIR.parent).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return parts


def _imports(path: Path) -> list[str]:
    """Absolute module names imported by ``path``, with relative imports resolved."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    parts = _module_parts(path)
    package = parts if path.name == "__init__.py" else parts[:-1]
    result: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            result.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package[: len(package) - node.level + 1]
                module = ".".join([*base, node.module] if node.module else base)
            else:
                module = node.module or ""
            result.append(module)
    return result


def _layer_of(module: str) -> str | None:
    parts = module.split(".")
    if parts[0] != "lightsplit" or len(parts) < 2:
        return None
    return parts[1]


@pytest.mark.parametrize("layer", sorted(_ALLOWED_LAYERS))
def test_layer_imports_follow_dependency_rule(layer: str) -> None:
    violations: list[str] = []
    for path in sorted((_PACKAGE_DIR / layer).rglob("*.py")):
        for module in _imports(path):
            target = _layer_of(module)
            if target is not None and target not in _ALLOWED_LAYERS[layer]:
                violations.append(f"{path.relative_to(_PACKAGE_DIR)}: {module}")
    assert not violations, f"{layer} import violations:\n" + "\n".join(violations)


def test_domain_has_no_io_or_logging() -> None:
    forbidden = {"logging", "os", "sys", "pathlib", "fastapi", "lightsplit.runtime.logging"}
    violations: list[str] = []
    for path in sorted((_PACKAGE_DIR / "domain").rglob("*.py")):
        for module in _imports(path):
            if module in forbidden:
                violations.append(f"{path.name}: {module}")
    assert not violations, "Domain I/O imports:\n" + "\n".join(violations)
