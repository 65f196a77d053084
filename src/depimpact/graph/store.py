"""Read and write the serialized dependency graph document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from depimpact.graph.builder import DependencyGraph, load_graph
from depimpact.graph.models import GraphDocument

logger = logging.getLogger("depimpact.graph")


def read_graph_document(path: str | Path) -> Any | None:
    """Parse the graph JSON at `path`.

    Returns None if the file is missing, unreadable or not valid JSON.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No dependency graph at {path}")
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning(f"Cannot read dependency graph {path}: {e}")
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        logger.warning(f"Cannot parse dependency graph {path}: {e}")
    return None


def load_graph_file(path: str | Path) -> DependencyGraph | None:
    """Load a DependencyGraph from disk, or None if there is no usable graph."""
    return load_graph(read_graph_document(path))


def save_graph_document(document: GraphDocument, path: str | Path) -> Path:
    """Write a graph document as indented JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document.to_json_dict(), indent=2), encoding="utf-8")
    return path
