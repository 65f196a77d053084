"""Build the in-memory dependency graph and its reverse index."""

from __future__ import annotations

import logging
from typing import Any

import networkx as nx
from pydantic import ValidationError

from depimpact.graph.models import GraphDocument
from depimpact.graph.paths import normalize_path, strip_source_extension

logger = logging.getLogger("depimpact.graph")

ReverseGraph = dict[str, set[str]]


class DependencyGraph:
    """Modules and their resolved dependency edges.

    Nodes are canonical module paths. An edge ``a -> b`` means module ``a``
    depends on module ``b``. Unresolved dependencies never enter the graph.
    Nodes keep document order, which the resolver relies on for ties.
    """

    def __init__(self) -> None:
        self.graph = nx.DiGraph()
        self._stem_index: dict[str, list[str]] = {}

    @classmethod
    def from_document(cls, document: GraphDocument) -> DependencyGraph:
        model = cls()
        for record in document.modules:
            source = normalize_path(record.source)
            if not source:
                continue
            model._add_module(source, declared=True)
            for dep in record.dependencies:
                if not dep.is_resolved:
                    continue
                target = normalize_path(dep.resolved)
                model._add_module(target)
                model.graph.add_edge(source, target)
        return model

    def _add_module(self, path: str, declared: bool = False) -> None:
        if self.graph.has_node(path):
            if declared:
                self.graph.nodes[path]["declared"] = True
            return
        self.graph.add_node(path, declared=declared)
        self._stem_index.setdefault(strip_source_extension(path), []).append(path)

    def has_module(self, path: str) -> bool:
        return self.graph.has_node(path)

    def modules(self) -> list[str]:
        return list(self.graph.nodes)

    def modules_with_stem(self, stem: str) -> list[str]:
        return self._stem_index.get(stem, [])

    def dependencies_of(self, path: str) -> list[str]:
        if not self.graph.has_node(path):
            return []
        return list(self.graph.successors(path))

    def is_empty(self) -> bool:
        return self.graph.number_of_nodes() == 0

    def get_stats(self) -> dict:
        """Get graph statistics."""
        declared = sum(1 for _, d in self.graph.nodes(data=True) if d.get("declared"))
        return {
            "modules": declared,
            "total_nodes": self.graph.number_of_nodes(),
            "total_edges": self.graph.number_of_edges(),
            "cycles": not nx.is_directed_acyclic_graph(self.graph),
        }


def load_graph(raw: Any) -> DependencyGraph | None:
    """Build a DependencyGraph from a parsed graph document.

    Returns None when the document is absent, is not a mapping, lacks
    ``modules`` or does not validate. Callers treat None as an empty graph.
    """
    if raw is None:
        return None
    if not isinstance(raw, dict) or "modules" not in raw:
        logger.warning("Graph document has no 'modules' field; ignoring it")
        return None
    try:
        document = GraphDocument.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Malformed graph document: {e}")
        return None
    return DependencyGraph.from_document(document)


def build_reverse(model: DependencyGraph | None) -> ReverseGraph:
    """Invert resolved edges into target -> set of dependent modules."""
    reverse: ReverseGraph = {}
    if model is None:
        return reverse
    for source in model.modules():
        for target in model.dependencies_of(source):
            reverse.setdefault(target, set()).add(source)
    return reverse
