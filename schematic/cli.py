"""
CLI Interface
=============
Command-line interface for the schematic scanner.

Usage:
    python -m schematic scan <input_path> [options]
    python -m schematic symbols <input_path> [--gears-only]
"""

from __future__ import annotations

import json
import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .engine import ScannerConfig, SchematicEngine
from .errors import ScanError
from .models import GEAR_CHAR

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="schematic")
def cli():
    """Schematic Scanner: part numbers and gear ratios from engine schematics."""
    pass


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--gear-char", "-g",
    default=GEAR_CHAR,
    help="Symbol character that marks a gear",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON result to stdout (for programmatic use)",
)
def scan(
    input_path: str,
    gear_char: str,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Scan a schematic and report the part-number and gear-ratio sums."""

    if json_output:
        log_level = "ERROR"

    config = ScannerConfig(
        gear_char=gear_char,
        log_level=log_level,
        log_file=log_file,
    )

    result = _run(config, input_path)

    if json_output:
        print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
        return

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Schematic Scanner v{__version__}[/]\n"
            f"[dim]Scanning: {escape(os.path.basename(input_path))}[/]",
            border_style="cyan",
        )
    )
    _display_report(result.report.model_dump())


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--gears-only",
    is_flag=True,
    default=False,
    help="Only list gears (symbols with exactly two part numbers)",
)
@click.option(
    "--gear-char", "-g",
    default=GEAR_CHAR,
    help="Symbol character that marks a gear",
)
def symbols(input_path: str, gears_only: bool, gear_char: str):
    """List every symbol with its adjacent part numbers."""

    config = ScannerConfig(gear_char=gear_char, log_level="ERROR")
    result = _run(config, input_path)

    table = Table(title="Symbols", border_style="cyan")
    table.add_column("Row", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Symbol", justify="center", style="bold")
    table.add_column("Part Numbers")

    for symbol in result.symbols:
        if gears_only and not symbol.is_gear(config.gear_char):
            continue
        table.add_row(
            str(symbol.row),
            str(symbol.column),
            escape(symbol.char),
            ", ".join(str(n.value) for n in symbol.numbers) or "[dim]-[/]",
        )

    console.print(table)


def _run(config: ScannerConfig, input_path: str):
    """Run a scan, printing errors and exiting non-zero on failure."""
    try:
        engine = SchematicEngine(config)
        return engine.scan_file(input_path)
    except ScanError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/] {escape(str(e))}")
        if config.log_level == "DEBUG":
            console.print_exception()
        sys.exit(1)


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_report(report: dict):
    """Display the scan report as a rich table."""
    table = Table(title="Scan Report", border_style="green")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Rows Scanned", str(report.get("rows_scanned", 0)))
    table.add_row("Part Numbers", str(report.get("number_count", 0)))
    table.add_row("Symbols", str(report.get("symbol_count", 0)))
    table.add_row("Isolated Symbols", str(report.get("isolated_symbol_count", 0)))
    table.add_row("Gears", str(report.get("gear_count", 0)))
    table.add_row(
        "Total Part Number Sum",
        f"[bold]{report.get('part_number_sum', 0)}[/]",
    )
    table.add_row(
        "Sum of Gear Ratios",
        f"[bold]{report.get('gear_ratio_sum', 0)}[/]",
    )

    console.print(table)
    console.print()

    breakdown = report.get("symbol_breakdown", {})
    if breakdown:
        breakdown_table = Table(
            title="Symbol Breakdown",
            border_style="yellow",
        )
        breakdown_table.add_column("Symbol", style="bold", justify="center")
        breakdown_table.add_column("Count", justify="right")

        for char, count in breakdown.items():
            breakdown_table.add_row(escape(char), str(count))

        console.print(breakdown_table)
        console.print()


if __name__ == "__main__":
    cli()
