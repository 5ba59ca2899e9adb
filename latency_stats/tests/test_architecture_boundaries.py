"""Architecture boundary guardrails for the inner ``base`` layer.

``latency_stats/base`` (computation, value types, logging, errors) must not
depend on the outer ``persistence`` or ``service`` layers at import time. Lazy
imports inside functions and ``TYPE_CHECKING`` blocks are allowed; only
module-level import statements are inspected.
"""

from __future__ import annotations

import ast
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
BASE_DIR = PACKAGE_ROOT / "base"
FORBIDDEN = ("latency_stats.persistence", "latency_stats.service")


def _iter_py_files(root: Path) -> list[Path]:
    return [p for p in root.rglob("*.py") if "__pycache__" not in p.parts]


def _module_level_imports(path: Path) -> list[str]:
    """Return absolute module names imported at the top level of ``path``."""
    rel = path.relative_to(PACKAGE_ROOT.parent).with_suffix("")
    package = list(rel.parts[:-1])
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    names: list[str] = []
    for node in tree.body:
        if isinstance(node, ast.Import):
            names.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                anchor = package[: len(package) - (node.level - 1)]
                module = ".".join(anchor + ([node.module] if node.module else []))
            else:
                module = node.module or ""
            names.append(module)
    return names


def test_base_does_not_import_outer_layers():
    violations = []
    for path in _iter_py_files(BASE_DIR):
        for module in _module_level_imports(path):
            if module.startswith(FORBIDDEN):
                violations.append(f"{path.relative_to(PACKAGE_ROOT)} -> {module}")
    assert not violations, "\n".join(violations)  # nosec B101


def test_relative_import_resolution_sanity():
    calc = BASE_DIR / "stats" / "calculator.py"
    imports = _module_level_imports(calc)
    assert "latency_stats.config.defaults" in imports  # nosec B101
    assert "latency_stats.base.logging" in imports  # nosec B101
