"""Command-line interface for depimpact."""

from __future__ import annotations

import json
import sys
import time
from pathlib import Path

import click

from depimpact import __version__
from depimpact.config import (
    ProjectConfig,
    find_project_root,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from depimpact.exceptions import ConfigError, DepImpactError, ReportWriteError
from depimpact.ui.console import Console, setup_logging

console = Console()


def _get_project_root(path: str | None = None) -> Path:
    """Resolve --path, else the enclosing project, else the cwd."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root
    return find_project_root() or Path.cwd()


def _load_project_config(root: Path) -> ProjectConfig:
    try:
        return load_config(root)
    except ConfigError as e:
        console.error(str(e))
        sys.exit(1)


def _resolve(root: Path, path: str) -> Path:
    p = Path(path)
    return p if p.is_absolute() else root / p


@click.group()
@click.version_option(version=__version__, prog_name="depimpact")
@click.option("--verbose", "-v", is_flag=True, help="Show progress logging.")
def main(verbose: bool):
    """depimpact - find the modules a change set could affect."""
    setup_logging(verbose)


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option("--max-depth", type=int, default=None, help="Maximum traversal depth.")
def init(path: str | None, max_depth: int | None):
    """Write a default configuration for a repository."""
    console.banner()
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(1)

    config = _load_project_config(root)
    config.name = root.name
    config.root_path = str(root)
    if max_depth is not None:
        config.impact.max_depth = max_depth
    save_config(root, config)
    console.success(f"Configuration saved to {root / '.depimpact'}")


# =========================================================================
# Dependency graph
# =========================================================================

@main.command("build-graph")
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option("--root", "-r", "source_roots", multiple=True,
              help="Source root to crawl (can specify multiple).")
@click.option("--output", "-o", default=None, help="Where to write the graph JSON.")
def build_graph(path: str | None, source_roots: tuple[str, ...], output: str | None):
    """Extract the Python import graph and write it as JSON.

    A failure here never fails the pipeline; the impact step degrades to
    an empty report when no graph exists.
    """
    from depimpact.extractors.python_graph import PythonGraphExtractor
    from depimpact.graph.builder import DependencyGraph
    from depimpact.graph.store import save_graph_document

    root = _get_project_root(path)
    config = _load_project_config(root)
    out_path = _resolve(root, output or config.impact.graph_path)

    start_time = time.time()
    try:
        extractor = PythonGraphExtractor(root, config.extractor)
        document = extractor.extract_graph(list(source_roots) or None)
        save_graph_document(document, out_path)
    except (OSError, ValueError, DepImpactError) as e:
        console.warning(f"Failed to build dependency graph (continuing): {e}")
        return

    elapsed = time.time() - start_time
    console.success(f"Dependency graph written to {out_path} in {elapsed:.1f}s")
    console.show_graph_stats(DependencyGraph.from_document(document).get_stats())


# =========================================================================
# Impact analysis
# =========================================================================

@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option("--base", "-b", default=None, help="Base commit (default: $BASE_SHA).")
@click.option("--head", default=None, help="Head commit (default: $HEAD_SHA).")
@click.option("--changed", "-c", multiple=True,
              help="Changed file; skips git (can specify multiple).")
@click.option("--graph", "-g", "graph_path", default=None, help="Dependency graph JSON.")
@click.option("--output", "-o", default=None, help="Where to write the report JSON.")
@click.option("--max-depth", "-d", type=int, default=None, help="Maximum traversal depth.")
@click.option("--limit", "-l", type=int, default=None,
              help="Impacted files to collect exports for.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def impact(
    path: str | None, base: str | None, head: str | None, changed: tuple[str, ...],
    graph_path: str | None, output: str | None, max_depth: int | None,
    limit: int | None, output_format: str,
):
    """Compute which modules a change set could affect.

    Usage in CI:

        depimpact impact --base $BASE_SHA --head $HEAD_SHA

    Local usage:

        depimpact impact --changed src/utils.ts --format json
    """
    from depimpact.extractors.dispatch import ExportExtractor
    from depimpact.impact.engine import ImpactEngine, write_report
    from depimpact.vcs import filter_source_files, get_changed_files

    root = _get_project_root(path)
    config = _load_project_config(root)
    impact_config = config.impact.model_copy()
    if max_depth is not None:
        impact_config.max_depth = max_depth
    if limit is not None:
        impact_config.export_limit = limit
    if impact_config.max_depth < 0:
        console.error("--max-depth must be >= 0")
        sys.exit(1)

    if changed:
        changed_files = filter_source_files(list(changed), impact_config.extensions)
    else:
        changed_files = get_changed_files(root, base, head, impact_config.extensions)

    engine = ImpactEngine(impact_config, ExportExtractor(root))
    report = engine.analyze(
        changed_files, _resolve(root, graph_path or impact_config.graph_path)
    )

    out_path = _resolve(root, output or impact_config.report_path)
    try:
        write_report(report, out_path)
    except ReportWriteError as e:
        console.error(str(e))
        sys.exit(1)

    if output_format == "json":
        click.echo(report.to_json())
        return

    console.show_impact(report)
    console.success(f"Wrote {out_path}")


# =========================================================================
# Configuration
# =========================================================================

@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """View or modify configuration."""
    root = _get_project_root(path)
    config = _load_project_config(root)

    if action == "show":
        click.echo(json.dumps(config.model_dump(), indent=2))
        return

    if not key:
        console.error(f"'config {action}' requires a key")
        sys.exit(1)

    try:
        if action == "get":
            click.echo(json.dumps(get_config_value(config, key)))
            return
        if value is None:
            console.error("'config set' requires a value")
            sys.exit(1)
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            parsed = value
        config = set_config_value(config, key, parsed)
    except (KeyError, ConfigError) as e:
        console.error(str(e).strip("'\""))
        sys.exit(1)

    save_config(root, config)
    console.success(f"Set {key} = {parsed!r}")


if __name__ == "__main__":
    main()
