#!/usr/bin/env python3
"""
Auxiliary utility functions for advisor

Provides formatting helpers shared by the report and the CLI, plus the
logging setup used by every entry point.
"""

import logging
import pathlib
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_bytes(size_bytes: int) -> str:
    """Format byte size into human-readable string

    Args:
        size_bytes: Size in bytes to format

    Returns:
        Formatted string like "1.2 GB", "345.0 MB", "12.0 KB", or "789 B"
        (base 1024, anything past 1024 TB stays in TB)
    """
    if size_bytes < 1024:
        return f"{max(size_bytes, 0)} B"

    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.1f} {SIZE_UNITS[unit]}"


def format_path_for_display(path: str, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with a leading home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    home_path = home_path.rstrip("/\\")
    if not home_path:
        return path
    if path == home_path:
        return "~"
    for sep in ("/", "\\"):
        if path.startswith(home_path + sep):
            return "~" + path[len(home_path) :]
    return path


def truncate_path(path: str, max_length: int = 60) -> str:
    """Truncate long paths for display

    Args:
        path: Path to truncate
        max_length: Maximum length before truncation

    Returns:
        Truncated path with ... in the middle if too long
    """
    if len(path) <= max_length:
        return path

    available = max_length - 3  # Account for "..."
    start_len = available // 2
    end_len = available - start_len

    return f"{path[:start_len]}...{path[-end_len:]}"


def setup_logging(verbosity: int = 0, no_color: bool = False):
    """Route log records to stderr through rich

    Args:
        verbosity: 0 for warnings only, 1 for info, 2 or more for debug
        no_color: Disable styling of log output
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=False,
        show_time=verbosity >= 2,
        markup=False,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
