#!/usr/bin/env python3
"""Restrict env reads to the tuning and logging configuration modules."""

from __future__ import annotations

import argparse
import ast
from pathlib import Path

ALLOWED_FILES = {
    "scrollkit/runtime/config.py",
    "scrollkit/runtime/logging.py",
}


def _is_env_get_call(node: ast.Call) -> bool:
    fn = node.func
    # os.getenv(...)
    if isinstance(fn, ast.Attribute) and fn.attr == "getenv":
        if isinstance(fn.value, ast.Name) and fn.value.id == "os":
            return True
    # os.environ.get(...)
    if isinstance(fn, ast.Attribute) and fn.attr == "get":
        if isinstance(fn.value, ast.Attribute) and fn.value.attr == "environ":
            if isinstance(fn.value.value, ast.Name) and fn.value.value.id == "os":
                return True
    return False


def _check_file(path: Path, rel: str) -> list[str]:
    if rel in ALLOWED_FILES:
        return []
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    return [
        f"{rel}:{node.lineno} env read outside tuning/logging config modules"
        for node in ast.walk(tree)
        if isinstance(node, ast.Call) and _is_env_get_call(node)
    ]


def main() -> int:
    parser = argparse.ArgumentParser(description="Check env read placement.")
    parser.add_argument("--root", default="scrollkit")
    args = parser.parse_args()

    violations: list[str] = []
    for path in sorted(Path(args.root).rglob("*.py")):
        violations.extend(_check_file(path, path.as_posix()))

    if violations:
        print("Env read placement violations:")
        for line in violations:
            print(f"  {line}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
