"""Interfaces for the external analysis tools the engine depends on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from depimpact.graph.models import GraphDocument


class GraphExtractor(ABC):
    """Crawls source roots and emits a module/edge document."""

    @abstractmethod
    def extract_graph(self, source_roots: list[str]) -> GraphDocument:
        """Build the dependency graph document for the given roots."""


class SymbolExtractor(ABC):
    """Lists the names a source file exports."""

    @abstractmethod
    def extract_exports(self, file_path: str) -> list[str]:
        """Return exported symbol names, first-declared first.

        Missing files yield an empty list.
        """


class CallableSymbolExtractor(SymbolExtractor):
    """Adapts a plain function to the SymbolExtractor interface."""

    def __init__(self, func: Callable[[str], list[str]]) -> None:
        self.func = func

    def extract_exports(self, file_path: str) -> list[str]:
        return self.func(file_path)


def unique_names(names: list[str]) -> list[str]:
    """Drop duplicates and empty names, keeping first occurrence order."""
    seen: dict[str, None] = {}
    for name in names:
        if name:
            seen.setdefault(name, None)
    return list(seen)
