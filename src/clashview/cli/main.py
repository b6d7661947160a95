#!/usr/bin/env python3
"""
CLASHVIEW CLI - Terminal Node Viewer
------------------------------------
Primary interface: fetches one or more Clash subscriptions, renders the
extracted nodes as cards and summarizes skipped records.

Author: ClashView Team
Date: 2026-10-17
"""

import os
import sys
import json
import logging
import argparse
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from clashview.cli.formatter import NodeFormatter
from clashview.core.config import load_config_from_env
from clashview.core.engine import ViewerEngine
from clashview.export.exporter import SUPPORTED_FORMATS

# Global console for consistent styling across the application
console = Console()

VERSION = "1.0.0"


class ClashViewCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="clashview",
            description="ClashView - Clash subscription node extractor & viewer",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = NodeFormatter(console)
        self._setup_args()

    def _setup_args(self):
        """Configures global flags and subcommands. Flags override CLASHVIEW_* env vars."""
        self.parser.add_argument("-v", "--version", action="version", version=f"clashview v{VERSION}")
        self.parser.add_argument("--timeout", dest="timeout", type=float, help="Override CLASHVIEW_TIMEOUT (seconds)")
        self.parser.add_argument("--user-agent", dest="user_agent", help="Override CLASHVIEW_USER_AGENT")
        self.parser.add_argument("--insecure", dest="insecure", action="store_true", help="Skip TLS certificate verification")
        self.parser.add_argument("--log-level", dest="log_level", help="Override CLASHVIEW_LOG_LEVEL (e.g., INFO, DEBUG)")

        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        show_parser = subparsers.add_parser("show", help="🔍 Display nodes from subscriptions")
        show_parser.add_argument("sources", nargs="+", help="Subscription URL(s) or local file path(s)")
        show_parser.add_argument("--json", action="store_true", help="Print nodes as JSON instead of cards")
        show_parser.add_argument("--verbose", action="store_true", help="List skipped (incomplete) records")

        export_parser = subparsers.add_parser("export", help="💾 Write extracted nodes to a file")
        export_parser.add_argument("source", help="Subscription URL or local file path")
        export_parser.add_argument("-o", "--output", required=True, help="Destination file")
        export_parser.add_argument("--format", choices=SUPPORTED_FORMATS, default="yaml", help="Output format (default: yaml)")

    def _apply_overrides(self, args: argparse.Namespace):
        """Precedence: CLI > env > defaults."""
        cli_to_env = {
            "timeout": "CLASHVIEW_TIMEOUT",
            "user_agent": "CLASHVIEW_USER_AGENT",
            "log_level": "CLASHVIEW_LOG_LEVEL",
        }
        for attr, env_key in cli_to_env.items():
            if getattr(args, attr, None) is not None:
                os.environ[env_key] = str(getattr(args, attr))
        if getattr(args, "insecure", False):
            os.environ["CLASHVIEW_VERIFY_SSL"] = "0"

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            f"[bold cyan]ClashView v{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _show(self, engine: ViewerEngine, args: argparse.Namespace) -> int:
        reports = engine.load_sources(args.sources)

        if args.json:
            payload = [self._report_to_json(r) for r in reports]
            console.print_json(json.dumps(payload, ensure_ascii=False))
            return 0 if any(r["success"] for r in reports) else 1

        self.print_header("Node Viewer")
        for r in reports:
            console.print(f"\n[bold cyan]Source:[/bold cyan] {escape(r['source'])}")
            if r["error"]:
                console.print(f"[bold red]Error:[/bold red] {escape(r['error'])}")
            elif r["message"]:
                console.print(f"[bold yellow]{r['message']}[/bold yellow]")
            self.formatter.display_nodes(r["nodes"])
            if args.verbose:
                self.formatter.show_dropped(r["dropped"])

        self.formatter.print_final_table(reports)
        self.formatter.print_summary(engine.generate_summary(reports))
        return 0 if any(r["success"] for r in reports) else 1

    def _export(self, engine: ViewerEngine, args: argparse.Namespace) -> int:
        report = engine.load_source(args.source)
        if not report["success"]:
            console.print(f"[bold red]Nothing exported:[/bold red] {escape(report['message'] or '')}")
            return 1
        try:
            path = engine.export_nodes(report["nodes"], args.output, args.format)
        except IOError as e:
            console.print(f"[bold red]Export failed:[/bold red] {escape(str(e))}")
            return 1
        console.print(f"[green]Exported {report['node_count']} node(s) to[/green] {escape(str(path))}")
        return 0

    def _report_to_json(self, report: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "source": report["source"],
            "status": report["status"],
            "error": report["error"],
            "nodes": [n.to_dict() for n in report["nodes"]],
            "skipped": [
                {"line": d.line_no, "missing": d.missing, "raw": d.raw_line.strip()}
                for d in report["dropped"]
            ],
        }

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        if not args.command:
            self.print_header("Clash Node Viewer")
            self.parser.print_help()
            return 0

        self._apply_overrides(args)
        try:
            cfg = load_config_from_env()
            logging.basicConfig(
                level=cfg.log_level,
                format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            )
        except ValueError as e:
            console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
            return 2
        engine = ViewerEngine(cfg)

        if args.command == "show":
            return self._show(engine, args)
        if args.command == "export":
            return self._export(engine, args)
        self.parser.print_help()
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point with interrupt handling."""
    try:
        return ClashViewCLI().run(argv)
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
