from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "bakery_pos"

# Imports each layer may not reach for. The till client and use cases talk to
# storage and HTTP only through application.ports.
LAYER_RULES: dict[str, frozenset[str]] = {
    "domain": frozenset(
        {
            "fastapi",
            "pydantic",
            "sqlalchemy",
            "redis",
            "httpx",
            "opentelemetry",
            "prometheus_client",
            "bakery_pos.application",
            "bakery_pos.api",
            "bakery_pos.infrastructure",
        }
    ),
    "application": frozenset(
        {
            "fastapi",
            "sqlalchemy",
            "redis",
            "httpx",
            "bakery_pos.api",
            "bakery_pos.infrastructure",
        }
    ),
}


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str
    layer: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _is_forbidden(module: str, forbidden: frozenset[str]) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in forbidden)


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def scan_file(file_path: Path, layer: str) -> list[Violation]:
    forbidden = LAYER_RULES[layer]
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    return [
        Violation(file_path=file_path, line=line, module=module, layer=layer)
        for line, module in _imported_modules(tree)
        if _is_forbidden(module, forbidden)
    ]


def find_violations(
    paths: Sequence[Path] | None = None,
    layer: str | None = None,
) -> list[Violation]:
    """Scan the given paths against one layer, or every layer under the package root."""
    if paths is None:
        targets = [(PACKAGE_ROOT / name, name) for name in LAYER_RULES]
    else:
        targets = [(path, layer or "domain") for path in paths]

    violations: list[Violation] = []
    for path, target_layer in targets:
        for file_path in _python_files(path):
            violations.extend(scan_file(file_path, target_layer))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Layer import policy check for src/bakery_pos."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to every checked layer.",
    )
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_RULES),
        default="domain",
        help="Rules to apply to --path entries.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.path:
        violations = find_violations([Path(item) for item in args.path], layer=args.layer)
    else:
        violations = find_violations()

    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"[{violation.layer}] {violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
