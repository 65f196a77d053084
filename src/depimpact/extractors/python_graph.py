"""Static import-graph extraction for Python source trees."""

from __future__ import annotations

import ast
import fnmatch
import logging
import os
from pathlib import Path

from depimpact.config import ExtractorConfig
from depimpact.extractors.base import GraphExtractor
from depimpact.graph.models import DependencyEdge, GraphDocument, ModuleRecord

logger = logging.getLogger("depimpact.extractors")

PYTHON_EXTENSIONS = (".py", ".pyi")


def default_source_roots(root: Path, candidates: list[str]) -> list[str]:
    """The configured roots that exist under `root`, or ``["."]``."""
    roots = [c for c in candidates if (root / c).is_dir()]
    return roots or ["."]


class PythonGraphExtractor(GraphExtractor):
    """Builds a module/edge document from Python imports.

    Module paths are relative to the project root with ``/`` separators.
    Imports that do not map onto a crawled file are kept as unresolved
    edges.
    """

    def __init__(self, root: str | Path = ".", config: ExtractorConfig | None = None) -> None:
        self.root = Path(root).resolve()
        self.config = config or ExtractorConfig()

    def extract_graph(self, source_roots: list[str] | None = None) -> GraphDocument:
        roots = source_roots or default_source_roots(self.root, self.config.source_roots)
        files = self._collect_files(roots)
        module_index = self._build_module_index(files, roots)

        modules: list[ModuleRecord] = []
        for rel_path in files:
            try:
                source = (self.root / rel_path).read_text(encoding="utf-8", errors="replace")
                tree = ast.parse(source, filename=rel_path)
            except (OSError, SyntaxError, ValueError) as e:
                # ValueError: source contains null bytes
                logger.warning(f"Skipping imports of {rel_path}: {e}")
                modules.append(ModuleRecord(source=rel_path))
                continue
            package = self._package_of(rel_path, roots)
            modules.append(
                ModuleRecord(
                    source=rel_path,
                    dependencies=self._dependencies(tree, package, module_index),
                )
            )

        logger.info(f"Extracted {len(modules)} Python modules from {', '.join(roots)}")
        return GraphDocument(modules=modules)

    def _collect_files(self, roots: list[str]) -> list[str]:
        """Collect Python files under the roots, respecting exclusion patterns."""
        exclude = self.config.exclude_patterns + _read_gitignore(self.root)
        max_size = self.config.max_file_size_kb * 1024
        seen: set[str] = set()

        for source_root in roots:
            base = (self.root / source_root).resolve()
            if not base.is_dir():
                continue
            for dirpath, dirnames, filenames in os.walk(base):
                rel_dir = Path(dirpath).relative_to(self.root).as_posix()
                dirnames[:] = [
                    d for d in dirnames
                    if not _should_exclude(f"{rel_dir}/{d}" if rel_dir != "." else d, exclude)
                ]
                for filename in filenames:
                    if not filename.endswith(PYTHON_EXTENSIONS):
                        continue
                    rel_path = f"{rel_dir}/{filename}" if rel_dir != "." else filename
                    if _should_exclude(rel_path, exclude):
                        continue
                    try:
                        if (Path(dirpath) / filename).stat().st_size > max_size:
                            continue
                    except OSError:
                        continue
                    seen.add(rel_path)

        return sorted(seen)

    def _build_module_index(self, files: list[str], roots: list[str]) -> dict[str, str]:
        """Map dotted module names to file paths.

        Each file is indexed relative to its source root and to the
        project root, so both ``pkg.mod`` and ``src.pkg.mod`` resolve.
        """
        index: dict[str, str] = {}
        for rel_path in files:
            for name in self._module_names(rel_path, roots):
                # .py wins over a .pyi stub of the same module
                if name not in index or index[name].endswith(".pyi"):
                    index[name] = rel_path
        return index

    def _module_names(self, rel_path: str, roots: list[str]) -> list[str]:
        names = []
        bases = [r.strip("/") for r in roots if r not in (".", "")] + [""]
        for base in bases:
            if base and not rel_path.startswith(base + "/"):
                continue
            inner = rel_path[len(base) + 1:] if base else rel_path
            name = _dotted_name(inner)
            if name and name not in names:
                names.append(name)
        return names

    def _package_of(self, rel_path: str, roots: list[str]) -> str:
        names = self._module_names(rel_path, roots)
        if not names:
            return ""
        name = names[0]
        if Path(rel_path).stem == "__init__":
            return name
        return name.rpartition(".")[0]

    def _dependencies(
        self, tree: ast.Module, package: str, module_index: dict[str, str]
    ) -> list[DependencyEdge]:
        edges: list[DependencyEdge] = []
        seen: set[str] = set()

        def add(specifier: str, candidates: list[str]) -> None:
            if specifier in seen:
                return
            seen.add(specifier)
            resolved = next((module_index[c] for c in candidates if c in module_index), None)
            edges.append(DependencyEdge(module=specifier, resolved=resolved))

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    add(alias.name, _prefixes(alias.name))
            elif isinstance(node, ast.ImportFrom):
                base = _absolute_module(node.module or "", node.level, package)
                if base is None:
                    continue
                for alias in node.names:
                    if alias.name == "*":
                        add("." * node.level + (node.module or ""), _prefixes(base))
                        continue
                    full = f"{base}.{alias.name}" if base else alias.name
                    specifier = "." * node.level + (f"{node.module}.{alias.name}" if node.module else alias.name)
                    add(specifier, [full] + _prefixes(base))

        return edges


def _dotted_name(rel_path: str) -> str:
    parts = list(Path(rel_path).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts = parts[:-1]
    if not parts or not all(p.isidentifier() for p in parts):
        return ""
    return ".".join(parts)


def _prefixes(name: str) -> list[str]:
    """``a.b.c`` -> ``["a.b.c", "a.b", "a"]``."""
    if not name:
        return []
    parts = name.split(".")
    return [".".join(parts[:i]) for i in range(len(parts), 0, -1)]


def _absolute_module(module: str, level: int, package: str) -> str | None:
    if level == 0:
        return module
    parts = package.split(".") if package else []
    if level - 1 > len(parts):
        return None
    base_parts = parts[: len(parts) - (level - 1)]
    if module:
        base_parts.append(module)
    return ".".join(base_parts)


def _should_exclude(path: str, patterns: list[str]) -> bool:
    """Check if a path matches any exclusion pattern."""
    path_parts = Path(path).parts
    for pattern in patterns:
        if fnmatch.fnmatch(path, pattern):
            return True
        for part in path_parts:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False


def _read_gitignore(root: Path) -> list[str]:
    """Read .gitignore patterns from the project root."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return []

    patterns = []
    try:
        for line in gitignore.read_text().splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                patterns.append(line.rstrip("/"))
    except (OSError, UnicodeDecodeError):
        pass
    return patterns
