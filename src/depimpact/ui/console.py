"""Rich-powered console output for depimpact."""

from __future__ import annotations

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from depimpact import __version__
from depimpact.impact.models import ImpactReport


class Console:
    """Terminal output for depimpact using Rich."""

    def __init__(self, stderr: bool = False) -> None:
        self.console = RichConsole(stderr=stderr)

    def banner(self) -> None:
        self.console.print(
            Panel(
                f"[bold cyan]depimpact[/bold cyan] [dim]v{__version__}[/dim]\n"
                "[dim]Change-impact analysis over dependency graphs[/dim]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def show_graph_stats(self, stats: dict) -> None:
        """Display dependency graph statistics."""
        table = Table(title="Dependency Graph", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Count", justify="right", style="cyan")
        table.add_row("Modules", str(stats.get("modules", 0)))
        table.add_row("Total Nodes", str(stats.get("total_nodes", 0)))
        table.add_row("Resolved Edges", str(stats.get("total_edges", 0)))
        table.add_row("Has Cycles", "yes" if stats.get("cycles") else "no")
        self.console.print(table)

    def show_impact(self, report: ImpactReport) -> None:
        """Display an impact report as a changed-file tree and a ranked table."""
        tree = Tree(f"[bold]Changed files[/bold] ({len(report.changed)})")
        for fp in report.changed:
            node = tree.add(f"[yellow]{fp}[/yellow]")
            for name in report.exports.get(fp, []):
                node.add(f"[dim]{name}[/dim]")
        self.console.print(tree)

        if not report.impacted:
            self.console.print("[dim]No dependent modules found.[/dim]")
            return

        table = Table(title="Impacted Modules", border_style="cyan")
        table.add_column("Depth", justify="right", style="bold")
        table.add_column("Module", style="cyan")
        table.add_column("Exports", style="dim")
        for entry in report.impacted:
            exports = report.exports.get(entry.file, [])
            shown = ", ".join(exports[:5])
            if len(exports) > 5:
                shown += f", +{len(exports) - 5}"
            table.add_row(str(entry.depth), entry.file, shown)
        self.console.print(table)
        self.console.print(
            f"[bold]{len(report.impacted_files)}[/bold] module(s) impacted, "
            f"max depth {report.max_depth()}"
        )


def setup_logging(verbose: bool = False) -> None:
    """Route depimpact log records to stderr through Rich."""
    logger = logging.getLogger("depimpact")
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=RichConsole(stderr=True),
            show_time=False,
            show_path=False,
        )
        logger.addHandler(handler)
