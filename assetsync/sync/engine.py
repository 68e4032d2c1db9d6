"""Core engine that rebuilds a destination tree from a filtered source tree."""

import logging
import time
from typing import Callable, Optional

from ..exceptions import SourceMissingError, SyncConfigError
from ..output import OutputFormatter
from ..utils import is_within
from .config import SyncConfig
from .operations import Operation, OperationKind, TreeOperations
from .reporter import RunReporter
from .scanner import TreeScanner

logger = logging.getLogger(__name__)


class SyncEngine:
    """Mirrors a source tree into a destination tree.

    The destination is always deleted and rebuilt from scratch; nothing is
    merged. Any filesystem error aborts the run immediately and may leave the
    destination partially populated.
    """

    def __init__(
        self,
        output: Optional[OutputFormatter] = None,
        reporter: Optional[RunReporter] = None,
    ):
        """Initialize sync engine.

        Args:
            output: Output formatter for displaying progress/status
            reporter: Reporter for per-operation lines (built from
                ``output`` when omitted)
        """
        self.output = output or OutputFormatter()
        self.reporter = reporter or RunReporter(self.output)
        self.operations = TreeOperations()

    def sync(
        self,
        config: SyncConfig,
        progress_callback: Optional[Callable[[Operation], None]] = None,
        plan_callback: Optional[Callable[[list[Operation]], None]] = None,
    ) -> dict:
        """Run one mirror according to ``config``.

        Args:
            config: Run configuration
            progress_callback: Optional callback function(operation) called
                after each applied operation (real runs only)
            plan_callback: Optional callback function(plan) called once the
                plan is complete, before anything is applied

        Returns:
            Dictionary with run statistics

        Raises:
            SourceMissingError: If the source is absent or not a directory
            SyncConfigError: If either root contains the other
            SyncIOError: If reading the source or applying an operation fails

        Examples:
            >>> engine = SyncEngine()
            >>> stats = engine.sync(SyncConfig(dry_run=True))
            >>> print(f"Would copy {stats['files']} files")
        """
        self.validate(config)
        self.reporter.start(config)

        stats = self._create_empty_stats(config.dry_run)
        plan = self.plan(config, stats)
        if plan_callback is not None:
            plan_callback(plan)

        start_time = time.time()
        for operation in plan:
            if not config.dry_run:
                self.operations.apply(operation)
            self._count(operation, stats)
            self.reporter.report(operation, config.dry_run)
            if progress_callback is not None and not config.dry_run:
                progress_callback(operation)

        logger.debug(
            "%s %d operation(s) in %.2fs",
            "Planned" if config.dry_run else "Applied",
            len(plan),
            time.time() - start_time,
        )
        self.reporter.summary(stats)
        return stats

    def validate(self, config: SyncConfig) -> None:
        """Check that ``config`` can be run without touching anything.

        Raises:
            SourceMissingError: If the source is absent or not a directory
            SyncConfigError: If either root contains the other
        """
        if not config.source.exists():
            raise SourceMissingError(config.source)
        if not config.source.is_dir():
            raise SourceMissingError(config.source, reason="is not a directory")
        if is_within(config.destination, config.source):
            raise SyncConfigError(
                f"Destination {config.destination} must not be inside "
                f"source {config.source}"
            )
        if is_within(config.source, config.destination):
            raise SyncConfigError(
                f"Source {config.source} must not be inside "
                f"destination {config.destination}"
            )

    def plan(self, config: SyncConfig, stats: Optional[dict] = None) -> list[Operation]:
        """Compute the ordered list of operations for a run.

        Nothing is written; the source tree is only read.

        Args:
            config: Run configuration
            stats: Optional statistics dictionary; excluded paths are counted
                into it

        Returns:
            Operations in the order they must be applied
        """
        destination = config.destination
        plan: list[Operation] = []

        if destination.exists() or destination.is_symlink():
            plan.append(Operation(OperationKind.REMOVE_DESTINATION, destination))
        plan.append(Operation(OperationKind.CREATE_DESTINATION, destination))

        def on_excluded(relative_path: str, is_dir: bool) -> None:
            if stats is not None:
                stats["excluded"] += 1
            self.reporter.excluded(relative_path, is_dir)

        scanner = TreeScanner(config.exclusion, on_excluded=on_excluded)
        for entry in scanner.scan(config.source):
            plan.append(Operation.for_entry(entry, destination))

        logger.debug("Planned %d operation(s) for %s", len(plan), config.source)
        return plan

    def _create_empty_stats(self, dry_run: bool) -> dict:
        """Create an empty statistics dictionary.

        Returns:
            Dictionary with zero counts for all stat categories
        """
        return {
            "dry_run": dry_run,
            "removed_destination": False,
            "directories": 0,
            "files": 0,
            "symlinks": 0,
            "fifos": 0,
            "bytes": 0,
            "excluded": 0,
        }

    def _count(self, operation: Operation, stats: dict) -> None:
        if operation.kind == OperationKind.REMOVE_DESTINATION:
            stats["removed_destination"] = True
        elif operation.kind == OperationKind.CREATE_DIRECTORY:
            stats["directories"] += 1
        elif operation.kind == OperationKind.COPY_FILE:
            stats["files"] += 1
            stats["bytes"] += operation.size
        elif operation.kind == OperationKind.COPY_SYMLINK:
            stats["symlinks"] += 1
        elif operation.kind == OperationKind.COPY_FIFO:
            stats["fifos"] += 1
