"""Change-impact analysis pipeline.

Runs the whole batch for one change set:
1. Load the dependency graph (a missing or broken graph is not fatal)
2. Invert it into a reverse index
3. Resolve changed files onto graph modules and walk dependents breadth-first
4. Collect exported symbols for the changed and closest impacted files
5. Write the report
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from depimpact.config import ImpactConfig
from depimpact.exceptions import ReportWriteError
from depimpact.extractors.base import SymbolExtractor
from depimpact.graph.builder import DependencyGraph, build_reverse, load_graph
from depimpact.graph.store import load_graph_file
from depimpact.impact.models import ImpactReport
from depimpact.impact.report import assemble_report
from depimpact.impact.traversal import impact_of

logger = logging.getLogger("depimpact.impact")


class ImpactEngine:
    """Computes impact reports from a dependency graph and a changed-file list."""

    def __init__(
        self,
        config: ImpactConfig | None = None,
        symbol_extractor: SymbolExtractor | None = None,
    ) -> None:
        self.config = config or ImpactConfig()
        self.symbol_extractor = symbol_extractor

    def analyze(
        self,
        changed: list[str],
        graph: DependencyGraph | dict[str, Any] | str | Path | None = None,
    ) -> ImpactReport:
        """Build the impact report for `changed`.

        `graph` may be a loaded model, a parsed graph document or a path to
        the serialized graph; it defaults to the configured graph path.
        Without a usable graph the report lists no impact and no exports.
        """
        model = self._load(graph)
        if model is None:
            logger.info("No usable dependency graph; emitting empty impact report")
            return ImpactReport.degenerate(changed)

        reverse = build_reverse(model)
        impacted = impact_of(changed, reverse, model, self.config.max_depth)
        logger.info(f"{len(changed)} changed file(s) impact {len(impacted)} module(s)")

        return assemble_report(
            changed,
            impacted,
            self.symbol_extractor,
            limit=self.config.export_limit,
            max_workers=self.config.max_workers,
        )

    def _load(self, graph: DependencyGraph | dict[str, Any] | str | Path | None) -> DependencyGraph | None:
        if isinstance(graph, DependencyGraph):
            return graph
        if isinstance(graph, dict):
            return load_graph(graph)
        return load_graph_file(graph if graph is not None else self.config.graph_path)

    def run(
        self,
        changed: list[str],
        graph: DependencyGraph | dict[str, Any] | str | Path | None = None,
        output: str | Path | None = None,
    ) -> ImpactReport:
        """Analyze and write the report; returns the report."""
        report = self.analyze(changed, graph)
        write_report(report, output if output is not None else self.config.report_path)
        return report


def write_report(report: ImpactReport, path: str | Path) -> Path:
    """Write the report as JSON, creating parent directories.

    Raises ReportWriteError when the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report.to_json(), encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(str(path), str(e)) from e
    logger.info(f"Wrote impact report to {path}")
    return path
