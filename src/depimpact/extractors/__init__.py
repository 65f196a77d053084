"""Graph and symbol extractors consumed by the impact engine."""

from depimpact.extractors.base import (
    CallableSymbolExtractor,
    GraphExtractor,
    SymbolExtractor,
)
from depimpact.extractors.dispatch import ExportExtractor
from depimpact.extractors.python_graph import PythonGraphExtractor

__all__ = [
    "CallableSymbolExtractor",
    "ExportExtractor",
    "GraphExtractor",
    "PythonGraphExtractor",
    "SymbolExtractor",
]
