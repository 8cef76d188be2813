"""Rendering of validation results as table, JSON or Markdown."""

import json
from enum import Enum

from rich.console import Console
from rich.table import Table

from .engine import SanityInfo


class ReportFormat(str, Enum):
    """Report format types."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


def to_table(info: SanityInfo) -> Table:
    """Build a rich table with one row per failing path."""
    table = Table()
    table.add_column("Path", style="cyan")
    table.add_column("Failure", style="white")
    table.add_column("Message", style="dim")

    for path in sorted(info.errors):
        kind = info.errors[path]
        table.add_row(path, f"[red]{kind.value}[/red]", kind.message)

    return table


def to_markdown(info: SanityInfo) -> str:
    """Render a Markdown report."""
    lines = [
        "# Validation Report",
        f"**Status:** {'valid' if info.valid else 'invalid'}",
        "",
    ]

    if info.errors:
        lines.append("## Failures")
        for path in sorted(info.errors):
            kind = info.errors[path]
            lines.append(f"- **{path}** {kind.value}: {kind.message}")

    return "\n".join(lines)


def render(info: SanityInfo, format: ReportFormat | str = ReportFormat.TABLE,
           console: Console | None = None) -> None:
    """Print a validation report.

    Args:
        info: Result of a check call
        format: Output format: table, json, markdown (default: table)
        console: Rich console to print to (default: stdout)

    Raises:
        ValueError: If the format is unknown
    """
    format = ReportFormat(format)
    console = console or Console()

    if format == ReportFormat.JSON:
        console.print(json.dumps(info.to_dict(), indent=2))
    elif format == ReportFormat.MARKDOWN:
        console.print(to_markdown(info), markup=False)
    else:  # table format
        if info.valid:
            console.print("[green]Validation Status: VALID[/green]")
            console.print("\n[green]No failures found![/green]")
            return

        console.print("[red]Validation Status: INVALID[/red]")
        console.print(f"Failures: {len(info.errors)}")
        console.print(to_table(info))
