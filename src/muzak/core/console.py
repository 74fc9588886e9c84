"""Centralized Rich Console management."""

from typing import Iterable

from rich.console import Console
from rich.table import Table

_console: Console | None = None


def get_console() -> Console:
    """Get or create the global Rich Console instance.

    Returns:
        Console: The global Rich Console instance
    """
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_listing(title: str, rows: Iterable[str], numbered: bool = False) -> None:
    """Print a single-column listing as a Rich table."""
    table = Table(title=title, show_header=False, box=None, pad_edge=False)
    if numbered:
        table.add_column(justify="right", style="dim")
    table.add_column()

    for i, row in enumerate(rows, start=1):
        if numbered:
            table.add_row(str(i), row)
        else:
            table.add_row(row)

    get_console().print(table)
