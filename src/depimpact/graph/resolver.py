"""Map changed-file paths onto dependency graph modules."""

from __future__ import annotations

from depimpact.graph.builder import DependencyGraph
from depimpact.graph.paths import normalize_path, strip_source_extension


def resolve(file_path: str, model: DependencyGraph | None) -> str:
    """Resolve a changed file to the module key used in the graph.

    Tries, in order: an exact match, a match ignoring the source extension,
    then a module whose path ends with the file path on a directory
    boundary (absolute vs. relative forms). Falls back to the normalized
    input, which simply has no dependents.
    """
    norm = normalize_path(file_path)
    if model is None or not norm:
        return norm

    if model.has_module(norm):
        return norm

    stem = strip_source_extension(norm)
    same_stem = model.modules_with_stem(stem)
    if same_stem:
        return same_stem[0]

    suffix = "/" + norm.lstrip("/")
    stem_suffix = "/" + stem.lstrip("/")
    for module in model.modules():
        if module.endswith(suffix) or strip_source_extension(module).endswith(stem_suffix):
            return module

    return norm


def resolve_all(file_paths: list[str], model: DependencyGraph | None) -> list[str]:
    """Resolve several files, keeping first-seen order and dropping duplicates."""
    seen: dict[str, None] = {}
    for fp in file_paths:
        seen.setdefault(resolve(fp, model), None)
    return list(seen)
