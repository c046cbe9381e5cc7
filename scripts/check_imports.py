#!/usr/bin/env python3
"""Check hexagonal layer boundaries of the verification core.

Rules enforced:
- domain/: models, errors and pure rules; imports nothing from other layers
- config/: plain settings; imports nothing from other layers
- application/: services and ports; may import domain/
- infrastructure/: adapters and stubs; may import domain/ and application/
- bootstrap/: composition root; may import every layer

Usage:
    python scripts/check_imports.py [src_directory]

Exit codes:
    0: No violations found
    1: Violations found
"""
import ast
import sys
from pathlib import Path

ALLOWED_IMPORTS: dict[str, frozenset[str]] = {
    "domain": frozenset(),
    "config": frozenset(),
    "application": frozenset({"domain"}),
    "infrastructure": frozenset({"domain", "application"}),
    "bootstrap": frozenset({"domain", "application", "infrastructure", "config"}),
}

Violation = tuple[str, int, str]


def get_imported_modules(node: ast.Import | ast.ImportFrom) -> list[str]:
    """Return every absolute module named by an import statement.

    Relative imports stay inside their package and are ignored.
    """
    if isinstance(node, ast.ImportFrom):
        if node.level or node.module is None:
            return []
        return [node.module]
    return [alias.name for alias in node.names]


def layer_of_module(module: str) -> str | None:
    """Map ``src.<layer>...`` to its layer name."""
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != "src":
        return None
    return parts[1] if parts[1] in ALLOWED_IMPORTS else None


def layer_of_file(py_file: Path, src_dir: Path) -> str | None:
    try:
        relative = py_file.relative_to(src_dir)
    except ValueError:
        return None
    if len(relative.parts) < 2:
        return None
    layer = relative.parts[0]
    return layer if layer in ALLOWED_IMPORTS else None


def check_source(source: str, file_layer: str, filename: str = "<string>") -> list[Violation]:
    """Check source text belonging to ``file_layer``.

    Raises:
        SyntaxError: If the source does not parse.
    """
    tree = ast.parse(source, filename=filename)
    allowed = ALLOWED_IMPORTS[file_layer]
    violations: list[Violation] = []
    for node in ast.walk(tree):
        if not isinstance(node, (ast.Import, ast.ImportFrom)):
            continue
        for module in get_imported_modules(node):
            target = layer_of_module(module)
            if target is None or target == file_layer or target in allowed:
                continue
            violations.append(
                (filename, node.lineno, f"{file_layer} layer cannot import from {target}")
            )
    return violations


def check_file_imports(py_file: Path, src_dir: Path) -> list[Violation]:
    file_layer = layer_of_file(py_file, src_dir)
    if file_layer is None:
        return []
    try:
        source = py_file.read_text(encoding="utf-8")
        return check_source(source, file_layer, str(py_file))
    except (SyntaxError, UnicodeDecodeError) as e:
        print(f"Warning: Could not parse {py_file}: {e}", file=sys.stderr)
        return []


def check_import_boundaries(src_dir: Path) -> list[Violation]:
    """Check every Python file under ``src_dir``."""
    if not src_dir.is_dir():
        print(f"Error: Source directory '{src_dir}' does not exist", file=sys.stderr)
        return []

    violations: list[Violation] = []
    for py_file in sorted(src_dir.rglob("*.py")):
        violations.extend(check_file_imports(py_file, src_dir))
    return violations


def format_violations(violations: list[Violation]) -> str:
    if not violations:
        return ""

    lines = ["Import boundary violations found:", ""]
    for file_path, line_no, message in sorted(violations):
        lines.append(f"  {file_path}:{line_no}: {message}")
    lines.append("")
    lines.append(f"Total: {len(violations)} violation(s)")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        0 if no violations, 1 if violations found
    """
    args = sys.argv[1:] if argv is None else argv
    src_dir = Path(args[0]) if args else Path(__file__).parent.parent / "src"

    violations = check_import_boundaries(src_dir)
    if violations:
        print(format_violations(violations))
        return 1
    print("No import boundary violations found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
