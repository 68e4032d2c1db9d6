"""Human-readable reporting of mirror runs."""

import logging
import os
from typing import Optional

from ..output import OutputFormatter
from .config import SyncConfig
from .operations import Operation, OperationKind

logger = logging.getLogger(__name__)

_DRY_RUN_TEMPLATES = {
    OperationKind.REMOVE_DESTINATION: "Would remove existing destination directory: {target}",
    OperationKind.CREATE_DESTINATION: "Would create destination directory: {target}",
    OperationKind.CREATE_DIRECTORY: "Would create directory: {path}/",
    OperationKind.COPY_FILE: "Would copy: {path} ({size})",
    OperationKind.COPY_SYMLINK: "Would link: {path} -> {link}",
    OperationKind.COPY_FIFO: "Would create FIFO: {path}",
}

_APPLIED_TEMPLATES = {
    OperationKind.REMOVE_DESTINATION: "Removed existing destination directory: {target}",
    OperationKind.CREATE_DESTINATION: "Created destination directory: {target}",
    OperationKind.CREATE_DIRECTORY: "Created directory: {path}/",
    OperationKind.COPY_FILE: "Copied: {path} ({size})",
    OperationKind.COPY_SYMLINK: "Linked: {path} -> {link}",
    OperationKind.COPY_FIFO: "Created FIFO: {path}",
}


class RunReporter:
    """Prints one line per operation and a closing summary.

    The reporter only observes; nothing it does changes the outcome of a
    run.
    """

    def __init__(self, output: Optional[OutputFormatter] = None):
        """Initialize the reporter.

        Args:
            output: Output formatter for displaying progress/status
        """
        self.output = output or OutputFormatter()

    def start(self, config: SyncConfig) -> None:
        """Print the run header."""
        if self.output.quiet:
            return
        if config.dry_run:
            self.output.info("Running in dry-run mode. No files will be changed.")
        self.output.info(
            f"Copying assets from {config.source} to {config.destination}..."
        )

    def excluded(self, relative_path: str, is_dir: bool) -> None:
        """Note an excluded entry."""
        logger.debug(
            "Skipping excluded %s: %s", "directory" if is_dir else "file", relative_path
        )

    def report(self, operation: Operation, dry_run: bool) -> None:
        """Print the line for one planned or applied operation.

        Args:
            operation: The operation
            dry_run: Whether the operation was only planned
        """
        if self.output.quiet:
            return
        self.output.progress_message(self.describe(operation, dry_run))

    def describe(self, operation: Operation, dry_run: bool) -> str:
        """Return the progress line for an operation."""
        templates = _DRY_RUN_TEMPLATES if dry_run else _APPLIED_TEMPLATES
        link = ""
        if operation.kind == OperationKind.COPY_SYMLINK and operation.entry is not None:
            link = os.readlink(operation.entry.path)
        return templates[operation.kind].format(
            target=operation.target,
            path=operation.relative_path,
            size=self.output.format_size(operation.size),
            link=link,
        )

    def summary(self, stats: dict) -> None:
        """Print the closing summary.

        Args:
            stats: Statistics dictionary returned by the sync engine
        """
        if self.output.quiet:
            return

        self.output.print("")
        items = [
            ("Directories", str(stats["directories"])),
            ("Files", str(stats["files"])),
            ("Total size", self.output.format_size(stats["bytes"])),
        ]
        if stats["symlinks"]:
            items.append(("Symlinks", str(stats["symlinks"])))
        if stats.get("fifos"):
            items.append(("FIFOs", str(stats["fifos"])))
        if stats["excluded"]:
            items.append(("Excluded", f"{stats['excluded']} path(s)"))

        if stats["dry_run"]:
            self.output.print_summary("Dry-run plan", items)
            self.output.success("Dry-run finished. No changes were made.")
        else:
            self.output.print_summary("Copied", items)
            self.output.success("DONE!")
