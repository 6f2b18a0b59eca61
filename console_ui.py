#!/usr/bin/env python3
"""
Console UI Module using Rich

Provides the styled output used by advisor: colored messages, header
panels, key/value tables and an activity spinner for long scans. Errors go to
stderr so they can be separated from the advisory itself.
"""

from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table


class ConsoleUI:
    """Console output handler for advisories"""

    def __init__(self, no_color: bool = False, force_terminal: Optional[bool] = None):
        """Initialize stdout and stderr consoles"""
        self.console = Console(force_terminal=force_terminal, no_color=no_color, highlight=False)
        self.error_console = Console(stderr=True, force_terminal=force_terminal, no_color=no_color, highlight=False)

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_error(self, message: str):
        """Print error message in red on stderr"""
        self.error_console.print(message, style="red bold")

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow bold")

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_plain(self, message: str):
        """Print message without styling"""
        self.console.print(message)

    def print_header(self, title: str, subtitle: Optional[str] = None):
        """Print a header with optional subtitle"""
        if subtitle:
            header_text = f"[bold]{title}[/bold]\n[dim]{subtitle}[/dim]"
        else:
            header_text = f"[bold]{title}[/bold]"

        panel = Panel(header_text, box=box.ROUNDED, padding=(0, 1))
        self.console.print(panel)

    def print_usage(self, message: str):
        """Print usage text on stderr"""
        self.error_console.print(message, markup=False)

    # Configuration display
    def show_configuration(self, config: dict[str, Any]):
        """Display configuration in a formatted table"""
        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column("Setting", style="cyan dim", min_width=20, justify="right")
        table.add_column("Value", style="cyan", min_width=30)

        for key, value in config.items():
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            table.add_row(key, str(value))

        self.console.print(table)

    def create_activity_progress(self) -> Progress:
        """Create a Rich progress context manager for activity-only display (no counts)"""
        return Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            TimeElapsedColumn(),
            console=self.error_console,
            transient=True,
        )

    def print_separator(self, char: str = "─", length: int = 50):
        """Print a separator line"""
        self.console.print(char * length, style="dim")
