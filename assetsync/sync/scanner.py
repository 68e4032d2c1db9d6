"""Source tree traversal for mirror runs."""

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from ..exceptions import SyncIOError
from .exclusion import ExclusionRule

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    """Kinds of entries found in a source tree."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    FIFO = "fifo"
    """Named pipe; recreated empty, never read"""
    SPECIAL = "special"
    """Device or socket; never mirrored"""


@dataclass
class SourceEntry:
    """Represents one file, directory, symlink or FIFO in the source tree."""

    path: Path
    """Absolute path to the entry"""

    relative_path: str
    """Relative path (using forward slashes for cross-platform compatibility)"""

    kind: EntryKind
    """Kind of entry"""

    size: int = 0
    """File size in bytes (0 for directories and symlinks)"""

    mode: int = 0
    """Permission bits"""

    mtime: float = 0.0
    """Last modification time (Unix timestamp)"""

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    @classmethod
    def from_path(cls, entry_path: Path, base_path: Path) -> "SourceEntry":
        """Create a SourceEntry from a path without following symlinks.

        Args:
            entry_path: Absolute path to the entry
            base_path: Source root for calculating relative paths

        Returns:
            SourceEntry instance
        """
        st = entry_path.lstat()
        if stat.S_ISLNK(st.st_mode):
            kind = EntryKind.SYMLINK
        elif stat.S_ISDIR(st.st_mode):
            kind = EntryKind.DIRECTORY
        elif stat.S_ISREG(st.st_mode):
            kind = EntryKind.FILE
        elif stat.S_ISFIFO(st.st_mode):
            kind = EntryKind.FIFO
        else:
            kind = EntryKind.SPECIAL

        return cls(
            path=entry_path,
            relative_path=entry_path.relative_to(base_path).as_posix(),
            kind=kind,
            size=st.st_size if kind == EntryKind.FILE else 0,
            mode=stat.S_IMODE(st.st_mode),
            mtime=st.st_mtime,
        )


class TreeScanner:
    """Walks a source tree depth-first, pruning excluded subtrees.

    Entries within a directory are visited in name order, so the same tree
    always yields the same sequence. A directory is yielded before its
    contents.

    Examples:
        >>> scanner = TreeScanner(SegmentExclusion("ignore"))
        >>> for entry in scanner.scan(Path("assets")):
        ...     print(entry.relative_path)
    """

    def __init__(
        self,
        exclusion: ExclusionRule,
        on_excluded: Optional[Callable[[str, bool], None]] = None,
    ):
        """Initialize the scanner.

        Args:
            exclusion: Rule selecting entries to skip together with their subtree
            on_excluded: Optional callback function(relative_path, is_dir)
                called for every pruned entry
        """
        self.exclusion = exclusion
        self.on_excluded = on_excluded

    def scan(self, root: Path) -> Iterator[SourceEntry]:
        """Yield every non-excluded entry below ``root``.

        Raises:
            SyncIOError: If a directory cannot be listed or an entry cannot
                be inspected
        """
        yield from self._scan_directory(root, root)

    def _scan_directory(self, directory: Path, base_path: Path) -> Iterator[SourceEntry]:
        try:
            with os.scandir(directory) as it:
                names = sorted(item.name for item in it)
        except OSError as e:
            raise SyncIOError(f"Cannot read directory {directory}: {e}") from e

        for name in names:
            item = directory / name
            try:
                entry = SourceEntry.from_path(item, base_path)
            except OSError as e:
                raise SyncIOError(f"Cannot inspect {item}: {e}") from e

            if self.exclusion.matches(entry.relative_path, is_dir=entry.is_dir):
                logger.debug("Excluding: %s", entry.relative_path)
                if self.on_excluded is not None:
                    self.on_excluded(entry.relative_path, entry.is_dir)
                continue

            if entry.kind == EntryKind.SPECIAL:
                logger.warning("Skipping device or socket: %s", entry.relative_path)
                continue

            yield entry
            if entry.is_dir:
                yield from self._scan_directory(item, base_path)
