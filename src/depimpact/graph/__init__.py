"""Dependency graph model, reverse index and path resolution."""

from depimpact.graph.builder import DependencyGraph, build_reverse, load_graph
from depimpact.graph.paths import normalize_path, strip_source_extension
from depimpact.graph.resolver import resolve
from depimpact.graph.store import load_graph_file, read_graph_document

__all__ = [
    "DependencyGraph",
    "build_reverse",
    "load_graph",
    "load_graph_file",
    "normalize_path",
    "read_graph_document",
    "resolve",
    "strip_source_extension",
]
