"""Console output formatting for assetsync."""

import json
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from .utils import format_size


class OutputFormatter:
    """Prints user-facing messages through rich consoles.

    Informational output goes to stdout and is suppressed when ``quiet``
    or ``json_output`` is set. Warnings and errors always go to stderr.
    """

    def __init__(
        self,
        json_output: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """Initialize the output formatter.

        Args:
            json_output: Emit machine-readable JSON instead of text
            quiet: Suppress non-essential output
            console: Console for regular output (defaults to stdout)
            err_console: Console for warnings and errors (defaults to stderr)
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = console or Console(soft_wrap=True)
        self.err_console = err_console or Console(stderr=True, soft_wrap=True)

    @property
    def silent(self) -> bool:
        """Whether informational output is suppressed."""
        return self.quiet or self.json_output

    def print(self, message: str = "") -> None:
        """Print a plain message."""
        if self.silent:
            return
        self.console.print(message, markup=False, highlight=False)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if self.silent:
            return
        self.console.print(message, markup=False, highlight=False)

    def progress_message(self, message: str) -> None:
        """Print a progress line for a single operation."""
        if self.silent:
            return
        self.console.print(message, style="cyan", markup=False, highlight=False)

    def success(self, message: str) -> None:
        """Print a success message."""
        if self.silent:
            return
        self.console.print(message, style="bold green", markup=False, highlight=False)

    def warning(self, message: str) -> None:
        """Print a warning to stderr."""
        if self.quiet:
            return
        self.err_console.print(message, style="yellow", markup=False, highlight=False)

    def error(self, message: str) -> None:
        """Print an error to stderr. Never suppressed."""
        self.err_console.print(
            f"Error: {message}", style="bold red", markup=False, highlight=False
        )

    def output_json(self, data: Any) -> None:
        """Print data as JSON to stdout."""
        self.console.print(
            json.dumps(data, indent=2, default=str), markup=False, highlight=False
        )

    def print_summary(self, title: str, items: list[tuple[str, str]]) -> None:
        """Print a two-column summary table.

        Args:
            title: Table title
            items: List of (label, value) rows
        """
        if self.silent:
            return
        table = Table(title=title, show_header=False, box=None)
        table.add_column("Item", style="bold")
        table.add_column("Value")
        for label, value in items:
            table.add_row(label, value)
        self.console.print(table)

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """Format a byte count for display."""
        return format_size(size_bytes)
