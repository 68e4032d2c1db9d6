"""Planned filesystem operations and their application."""

import logging
import os
import shutil
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..exceptions import SyncIOError
from .scanner import EntryKind, SourceEntry

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    """Actions a mirror run can take."""

    REMOVE_DESTINATION = "remove_destination"
    """Recursively delete the existing destination"""

    CREATE_DESTINATION = "create_destination"
    """Create an empty destination root (with parents)"""

    CREATE_DIRECTORY = "create_directory"
    """Create a mirrored directory below the destination"""

    COPY_FILE = "copy_file"
    """Copy file content, permission bits and mtime"""

    COPY_SYMLINK = "copy_symlink"
    """Recreate a symlink without following it"""

    COPY_FIFO = "copy_fifo"
    """Recreate a named pipe with the same permission bits"""


@dataclass(frozen=True)
class Operation:
    """One planned step of a mirror run."""

    kind: OperationKind
    """What to do"""

    target: Path
    """Path that is created or removed"""

    relative_path: str = ""
    """Path relative to the roots (empty for root operations)"""

    entry: Optional[SourceEntry] = None
    """Source entry for copy and directory operations"""

    @property
    def size(self) -> int:
        """Bytes written by this operation."""
        if self.kind == OperationKind.COPY_FILE and self.entry is not None:
            return self.entry.size
        return 0

    @classmethod
    def for_entry(cls, entry: SourceEntry, destination: Path) -> "Operation":
        """Create the operation that mirrors ``entry`` under ``destination``."""
        return cls(
            kind=_ENTRY_OPERATIONS[entry.kind],
            target=destination.joinpath(*entry.relative_path.split("/")),
            relative_path=entry.relative_path,
            entry=entry,
        )


_ENTRY_OPERATIONS = {
    EntryKind.FILE: OperationKind.COPY_FILE,
    EntryKind.DIRECTORY: OperationKind.CREATE_DIRECTORY,
    EntryKind.SYMLINK: OperationKind.COPY_SYMLINK,
    EntryKind.FIFO: OperationKind.COPY_FIFO,
}


class TreeOperations:
    """Applies operations to the local filesystem, one at a time."""

    def apply(self, operation: Operation) -> None:
        """Apply a single operation.

        Args:
            operation: Operation to apply

        Raises:
            SyncIOError: If the underlying filesystem call fails; the
                original OSError is chained
        """
        handler = {
            OperationKind.REMOVE_DESTINATION: self.remove_tree,
            OperationKind.CREATE_DESTINATION: self.create_root,
            OperationKind.CREATE_DIRECTORY: self.create_directory,
            OperationKind.COPY_FILE: self.copy_file,
            OperationKind.COPY_SYMLINK: self.copy_symlink,
            OperationKind.COPY_FIFO: self.copy_fifo,
        }[operation.kind]

        logger.debug("Applying %s: %s", operation.kind.value, operation.target)
        try:
            handler(operation)
        except OSError as e:
            raise SyncIOError(
                f"Failed to {operation.kind.value.replace('_', ' ')} "
                f"{operation.target}: {e}",
                operation=operation,
            ) from e

    def remove_tree(self, operation: Operation) -> None:
        target = operation.target
        if target.is_symlink() or not target.is_dir():
            target.unlink()
        else:
            shutil.rmtree(target)

    def create_root(self, operation: Operation) -> None:
        operation.target.mkdir(parents=True, exist_ok=False)

    def create_directory(self, operation: Operation) -> None:
        operation.target.mkdir()
        if operation.entry is not None:
            # Owner keeps write access so the subtree can be filled
            os.chmod(operation.target, operation.entry.mode | stat.S_IRWXU)

    def copy_file(self, operation: Operation) -> None:
        assert operation.entry is not None
        shutil.copy2(operation.entry.path, operation.target, follow_symlinks=False)

    def copy_symlink(self, operation: Operation) -> None:
        assert operation.entry is not None
        link_target = os.readlink(operation.entry.path)
        os.symlink(link_target, operation.target)

    def copy_fifo(self, operation: Operation) -> None:
        assert operation.entry is not None
        os.mkfifo(operation.target)
        os.chmod(operation.target, operation.entry.mode)
