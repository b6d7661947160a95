# src/clashview/cli/formatter.py
from typing import Any, Dict, List

from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from clashview.core.models import DroppedRecord, NodeRecord

# Initialize the Rich console for high-quality terminal output
console = Console()


class NodeFormatter:
    """
    NodeFormatter: The visual heart of the CLI.
    Responsible for rendering node cards, diagnostics and the final report.
    """

    def __init__(self, out: Console = None):
        self.console = out or console

    def node_card(self, node: NodeRecord) -> Panel:
        """One card per node, primary fields first."""
        grid = Table.grid(padding=(0, 1))
        grid.add_column(style="bold bright_black", no_wrap=True)
        grid.add_column(overflow="fold")
        for detail in node.details():
            grid.add_row(f"{detail.label}:", escape(str(detail.value)))
        return Panel(grid, title=f"[bold blue]{escape(str(node.name))}[/bold blue]", border_style="blue", expand=True)

    def display_nodes(self, nodes: List[NodeRecord]):
        if not nodes:
            return
        self.console.print(Columns([self.node_card(n) for n in nodes], equal=True, expand=True))

    def show_dropped(self, dropped: List[DroppedRecord]):
        """
        Lists every record line that failed validation, with the fields
        it was missing.
        """
        if not dropped:
            return

        for record in dropped:
            self.console.print(
                f"[bold yellow]⚠  Skipped line {record.line_no}[/bold yellow] "
                f"(missing: {', '.join(record.missing)}) [dim]{escape(record.raw_line.strip())}[/dim]",
                markup=True, highlight=False,
            )

    def print_final_table(self, reports: List[Dict[str, Any]]):
        table = Table(title="ClashView Extraction Report", show_header=True, header_style="bold magenta")
        table.add_column("Source", style="cyan", overflow="fold")
        table.add_column("Status")
        table.add_column("Nodes", justify="right")
        table.add_column("Skipped", justify="right")
        table.add_column("Result", justify="center")

        for r in reports:
            success = r.get("success", False)
            status_color = "green" if success else "yellow" if r.get("status") == "EMPTY" else "red"
            table.add_row(
                escape(str(r.get("source"))),
                f"[{status_color}]{r.get('status', 'FAILED')}[/{status_color}]",
                str(r.get("node_count", 0)),
                str(len(r.get("dropped") or [])),
                "✅" if success else "❌",
            )

        self.console.print(table)

    def print_summary(self, summary: Dict[str, Any]):
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Sources:        {summary['total_sources']}\n"
            f"With nodes:     [green]{summary['successful']}[/green]\n"
            f"Total nodes:    {summary['total_nodes']}\n"
            f"Skipped lines:  [yellow]{summary['dropped_records']}[/yellow]\n"
            f"Errors:         [red]{summary['errors']}[/red]",
            border_style="dim"
        ))
