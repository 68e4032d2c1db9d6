"""CLI progress display for mirror runs.

This module provides a Rich-based progress bar fed by the sync engine's
per-operation callback.
"""

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TransferSpeedColumn,
)

from .sync.operations import Operation, OperationKind
from .utils import format_size


class CopyProgressDisplay:
    """Rich-based progress display for a real (non dry-run) mirror.

    The bar tracks bytes copied against the total planned; the side text
    shows files copied against files planned.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the progress display."""
        self._console = console
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None
        self._files_total = 0
        self._files_done = 0
        self._bytes_total = 0
        self._bytes_done = 0

    def _format_file_progress(self) -> str:
        """Format progress like "2/5 files, 1.5 KB/10.0 KB"."""
        return (
            f"{self._files_done}/{self._files_total} files, "
            f"{format_size(self._bytes_done)}/{format_size(self._bytes_total)}"
        )

    def on_plan(self, plan: list[Operation]) -> None:
        """Set the totals once the engine has planned the run."""
        copies = [op for op in plan if op.kind == OperationKind.COPY_FILE]
        self._files_total = len(copies)
        self._bytes_total = sum(op.size for op in copies)
        if self._progress is not None and self._task is not None:
            self._progress.update(
                self._task,
                description="Copying assets",
                total=self._bytes_total,
                completed=0,
                file_info=self._format_file_progress(),
            )

    def on_operation(self, operation: Operation) -> None:
        """Advance the bar after an applied operation."""
        if operation.kind != OperationKind.COPY_FILE:
            return
        self._files_done += 1
        self._bytes_done += operation.size
        if self._progress is not None and self._task is not None:
            self._progress.update(
                self._task,
                completed=self._bytes_done,
                file_info=self._format_file_progress(),
            )

    def __enter__(self) -> "CopyProgressDisplay":
        """Enter context manager - start progress display."""
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("[cyan]{task.fields[file_info]}"),
            TransferSpeedColumn(),
            TimeElapsedColumn(),
            console=self._console,
            refresh_per_second=4,
        )
        self._progress.__enter__()
        self._task = self._progress.add_task(
            "Scanning assets...",
            total=None,
            file_info="0/0 files, 0 B/0 B",
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - stop progress display."""
        if self._progress is not None:
            if self._task is not None:
                self._progress.update(
                    self._task,
                    description="Copy failed" if exc_type else "Copy complete",
                )
            self._progress.__exit__(exc_type, exc_val, exc_tb)
            self._progress = None
            self._task = None


def run_sync_with_progress(engine, config, show_progress: bool = True) -> dict:
    """Run a mirror with a Rich progress display.

    Args:
        engine: SyncEngine instance
        config: SyncConfig to run
        show_progress: If False, run without a progress bar

    Returns:
        Dictionary with run statistics
    """
    # Dry runs only print the plan
    if config.dry_run or not show_progress:
        return engine.sync(config)

    with CopyProgressDisplay(console=engine.output.console) as display:
        return engine.sync(
            config,
            progress_callback=display.on_operation,
            plan_callback=display.on_plan,
        )
