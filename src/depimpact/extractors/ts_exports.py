"""Exported-symbol extraction for JavaScript/TypeScript using tree-sitter."""

from __future__ import annotations

from pathlib import Path

from depimpact.exceptions import ExtractionError
from depimpact.extractors.base import SymbolExtractor, unique_names

# extension -> (grammar module, language factory)
_GRAMMARS = {
    ".ts": ("tree_sitter_typescript", "language_typescript"),
    ".mts": ("tree_sitter_typescript", "language_typescript"),
    ".cts": ("tree_sitter_typescript", "language_typescript"),
    ".tsx": ("tree_sitter_typescript", "language_tsx"),
    ".js": ("tree_sitter_javascript", "language"),
    ".jsx": ("tree_sitter_javascript", "language"),
    ".mjs": ("tree_sitter_javascript", "language"),
    ".cjs": ("tree_sitter_javascript", "language"),
}

_NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
    "class_declaration",
    "abstract_class_declaration",
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
    "internal_module",
    "module",
}

_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}

_ANONYMOUS_FUNCTIONS = {"function", "function_expression", "generator_function", "arrow_function"}


def is_supported(file_path: str) -> bool:
    return Path(file_path).suffix.lower() in _GRAMMARS


def _get_language(file_path: str):
    """Get a tree-sitter Language object for the file's extension."""
    from tree_sitter import Language

    ext = Path(file_path).suffix.lower()
    if ext not in _GRAMMARS:
        raise ExtractionError(f"No tree-sitter grammar for extension: {ext}")
    module_name, factory = _GRAMMARS[ext]
    module = __import__(module_name)
    return Language(getattr(module, factory)())


def _text(node) -> str:
    return node.text.decode("utf-8") if node is not None else ""


def ts_exports(source: str, file_path: str) -> list[str]:
    """Names exported by a JS/TS module, first-declared first.

    Named declarations come out under their own name, export clauses under
    their exported alias. Anonymous default exports are reported as
    ``default(function)``, ``default(class)`` or ``default``.
    """
    from tree_sitter import Parser

    try:
        parser = Parser(_get_language(file_path))
        tree = parser.parse(source.encode("utf-8"))
    except ExtractionError:
        raise
    except Exception as e:
        raise ExtractionError(f"tree-sitter parse error in {file_path}: {e}") from e

    names: list[str] = []
    for child in tree.root_node.children:
        if child.type == "export_statement":
            names.extend(_export_statement_names(child))
    return unique_names(names)


def _export_statement_names(node) -> list[str]:
    is_default = any(c.type == "default" for c in node.children)

    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        names = _declaration_names(declaration)
        if not names and is_default:
            return ["default"]
        return names

    value = node.child_by_field_name("value")
    if is_default:
        if value is not None and value.type in _ANONYMOUS_FUNCTIONS:
            return ["default(function)"]
        if value is not None and value.type == "class":
            return ["default(class)"]
        return ["default"]

    names: list[str] = []
    for child in node.children:
        if child.type == "export_clause":
            for spec in child.children:
                if spec.type != "export_specifier":
                    continue
                alias = spec.child_by_field_name("alias")
                names.append(_text(alias or spec.child_by_field_name("name")))
        elif child.type == "namespace_export":
            names.extend(_text(c) for c in child.children if c.type == "identifier")
    return names


def _declaration_names(node) -> list[str]:
    if node.type in _NAMED_DECLARATIONS:
        return [_text(node.child_by_field_name("name"))]
    if node.type == "ambient_declaration":
        names: list[str] = []
        for child in node.named_children:
            names.extend(_declaration_names(child))
        return names
    if node.type in _VARIABLE_DECLARATIONS:
        names = []
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            names.extend(_binding_names(declarator.child_by_field_name("name")))
        return names
    return []


def _binding_names(node) -> list[str]:
    if node is None:
        return []
    if node.type in ("identifier", "shorthand_property_identifier_pattern"):
        return [_text(node)]
    names: list[str] = []
    for child in node.named_children:
        if child.type == "pair_pattern":
            names.extend(_binding_names(child.child_by_field_name("value")))
        elif child.type in ("assignment_pattern", "object_assignment_pattern"):
            names.extend(_binding_names(child.child_by_field_name("left")))
        else:
            names.extend(_binding_names(child))
    return names


class TypeScriptExportExtractor(SymbolExtractor):
    """Reads JS/TS files relative to a project root."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def extract_exports(self, file_path: str) -> list[str]:
        full_path = self.root / file_path
        if not full_path.is_file():
            return []
        source = full_path.read_text(encoding="utf-8", errors="replace")
        return ts_exports(source, file_path)
