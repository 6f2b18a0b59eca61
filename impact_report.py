#!/usr/bin/env python3
"""
Removal impact report

Turns a ScanResult into the tables shown before a recursive removal.
"""

from typing import Mapping

from rich import box
from rich.markup import escape
from rich.table import Table

from auxiliary import format_bytes, format_path_for_display, truncate_path
from console_ui import ConsoleUI
from tree_scanner import ScanResult


def top_extensions(file_types: Mapping[str, int], limit: int = 10) -> list[tuple[str, int]]:
    """Return the *limit* most common extensions, most frequent first.

    Ties keep the iteration order of *file_types*.
    """
    if limit <= 0:
        return []
    return sorted(file_types.items(), key=lambda item: item[1], reverse=True)[:limit]


def _summary_table(result: ScanResult) -> Table:
    table = Table(title="Would be deleted", box=box.ROUNDED, show_header=False)
    table.add_column("Item", style="cyan", min_width=18)
    table.add_column("Value", justify="right")

    table.add_row("Files", f"{result.total_files:,}")
    table.add_row("Directories", f"{result.total_directories:,}")
    table.add_row("Total size", f"[yellow]{format_bytes(result.total_size)}[/yellow]")
    if result.largest_file_path:
        largest = escape(truncate_path(format_path_for_display(result.largest_file_path)))
        table.add_row("Largest file", f"{largest} ({format_bytes(result.largest_file_size)})")
    if result.other_entries:
        table.add_row("Links / special", f"{result.other_entries:,}")
    if result.unmeasured_files:
        table.add_row("Unmeasured files", f"[red]{result.unmeasured_files:,}[/red]")
    if result.inaccessible_entries:
        table.add_row("Inaccessible", f"[red]{result.inaccessible_entries:,}[/red]")
    return table


def _extension_table(result: ScanResult, top_n: int) -> Table:
    ranked = top_extensions(result.file_types, top_n)
    shown = len(ranked)
    total = len(result.file_types)
    title = f"Top {shown} of {total} file types" if total > shown else "File types"

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Extension", style="cyan", min_width=14)
    table.add_column("Files", justify="right")
    table.add_column("Share", justify="right", style="dim")

    for ext, count in ranked:
        share = count / result.total_files * 100 if result.total_files else 0.0
        table.add_row(escape(ext), f"{count:,}", f"{share:.1f}%")
    return table


def render_impact_report(ui: ConsoleUI, result: ScanResult, top_n: int = 10):
    """Print the removal impact for one scanned directory"""
    ui.console.print(_summary_table(result))

    if result.file_types and top_n > 0:
        ui.console.print(_extension_table(result, top_n))

    if result.interrupted:
        ui.print_warning("Scan was interrupted; the figures above are incomplete.")
    elif result.unmeasured_files or result.inaccessible_entries:
        ui.print_info("Some entries could not be read; actual totals may be higher.")
