#!/usr/bin/env python3
"""
Fail if the transport or endpoint layers import the CLI/clone layers.
Checks all Python files under src/contentful_cma/core/ and endpoints/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_DIR = REPO_ROOT / "src" / "contentful_cma"
CHECKED_DIRS = (PACKAGE_DIR / "core", PACKAGE_DIR / "endpoints")

FORBIDDEN_PREFIXES = (
    "argparse",
    "contentful_cma.cli",
    "contentful_cma.clone",
    "contentful_cma.plain",
)
FORBIDDEN_RELATIVE = ("cli", "clone", "plain")


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                mod = alias.name
                if is_forbidden(mod):
                    errors.append(f"{path}: forbidden import '{mod}'")
        elif isinstance(node, ast.ImportFrom):
            mod = node.module or ""
            if node.level:
                head = mod.split(".")[0]
                if head in FORBIDDEN_RELATIVE or any(
                    a.name in FORBIDDEN_RELATIVE for a in node.names
                ):
                    errors.append(f"{path}: forbidden relative import '{mod}'")
            elif mod and is_forbidden(mod):
                errors.append(f"{path}: forbidden import '{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for directory in CHECKED_DIRS:
        for py_file in directory.rglob("*.py"):
            violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
