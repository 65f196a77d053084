"""Exported-symbol extraction for Python modules using the stdlib ast."""

from __future__ import annotations

import ast
from pathlib import Path

from depimpact.exceptions import ExtractionError
from depimpact.extractors.base import SymbolExtractor, unique_names


def python_exports(source: str, file_path: str = "<string>") -> list[str]:
    """Public names a Python module exports.

    An explicit ``__all__`` wins. Otherwise this is every public top-level
    function, class and assigned name, in declaration order. Package
    ``__init__`` modules also re-export their public imports.
    """
    try:
        tree = ast.parse(source, filename=file_path)
    except SyntaxError as e:
        raise ExtractionError(f"SyntaxError in {file_path}: {e}") from e

    declared = _dunder_all(tree)
    if declared is not None:
        return unique_names(declared)

    include_imports = Path(file_path).stem == "__init__"
    names: list[str] = []
    _collect(tree.body, names, include_imports)
    return unique_names([n for n in names if not n.startswith("_")])


def _dunder_all(tree: ast.Module) -> list[str] | None:
    for node in tree.body:
        if isinstance(node, ast.Assign):
            targets = [t.id for t in node.targets if isinstance(t, ast.Name)]
            value = node.value
        elif isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
            targets = [node.target.id]
            value = node.value
        else:
            continue
        if "__all__" not in targets or not isinstance(value, (ast.List, ast.Tuple)):
            continue
        return [
            elt.value
            for elt in value.elts
            if isinstance(elt, ast.Constant) and isinstance(elt.value, str)
        ]
    return None


def _collect(body: list[ast.stmt], names: list[str], include_imports: bool) -> None:
    for node in body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            names.append(node.name)
        elif isinstance(node, ast.Assign):
            for target in node.targets:
                names.extend(_target_names(target))
        elif isinstance(node, ast.AnnAssign):
            names.extend(_target_names(node.target))
        elif isinstance(node, ast.ImportFrom) and include_imports:
            names.extend(a.asname or a.name for a in node.names if a.name != "*")
        elif isinstance(node, ast.If):
            _collect(node.body, names, include_imports)
            _collect(node.orelse, names, include_imports)
        elif isinstance(node, ast.Try):
            _collect(node.body, names, include_imports)
            for handler in node.handlers:
                _collect(handler.body, names, include_imports)


def _target_names(target: ast.expr) -> list[str]:
    if isinstance(target, ast.Name):
        return [target.id]
    if isinstance(target, (ast.Tuple, ast.List)):
        out: list[str] = []
        for elt in target.elts:
            out.extend(_target_names(elt))
        return out
    return []


class PythonExportExtractor(SymbolExtractor):
    """Reads Python files relative to a project root."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def extract_exports(self, file_path: str) -> list[str]:
        full_path = self.root / file_path
        if not full_path.is_file():
            return []
        source = full_path.read_text(encoding="utf-8", errors="replace")
        return python_exports(source, file_path)
