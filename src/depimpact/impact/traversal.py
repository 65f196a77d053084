"""Depth-bounded, cycle-safe breadth-first impact traversal."""

from __future__ import annotations

from collections import deque

from depimpact.graph.builder import DependencyGraph, ReverseGraph
from depimpact.graph.resolver import resolve_all
from depimpact.impact.models import ImpactEntry

DEFAULT_MAX_DEPTH = 6


def impact_of(
    seed_files: list[str],
    reverse: ReverseGraph,
    model: DependencyGraph | None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[ImpactEntry]:
    """Find every module that transitively depends on a changed file.

    All seeds start at depth 0. A module keeps the depth at which it was
    first reached, which in BFS order is the minimum over all seeds.
    Modules at ``max_depth`` are recorded but not expanded. Seeds are
    never part of the result.

    Returns entries sorted by depth, then path.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    if model is None or model.is_empty() or not reverse:
        return []

    seeds = resolve_all(seed_files, model)
    depths: dict[str, int] = {seed: 0 for seed in seeds}
    queue: deque[tuple[str, int]] = deque((seed, 0) for seed in seeds)

    while queue:
        node, depth = queue.popleft()
        if depth >= max_depth:
            continue
        for dependent in sorted(reverse.get(node, ())):
            if dependent in depths:
                continue
            depths[dependent] = depth + 1
            queue.append((dependent, depth + 1))

    entries = [
        ImpactEntry(file=path, depth=depth)
        for path, depth in depths.items()
        if depth > 0
    ]
    entries.sort(key=lambda e: (e.depth, e.file))
    return entries
