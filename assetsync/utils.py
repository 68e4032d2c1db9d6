"""Utility functions for assetsync."""

from pathlib import Path, PurePosixPath

# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


# =============================================================================
# Path utilities
# =============================================================================


def path_segments(relative_path: str) -> tuple[str, ...]:
    """Split a relative POSIX path into its segments.

    Empty and ``.`` segments are dropped.

    Examples:
        >>> path_segments("a/ignore/b.txt")
        ('a', 'ignore', 'b.txt')
        >>> path_segments("./a//b")
        ('a', 'b')
    """
    return tuple(part for part in PurePosixPath(relative_path).parts if part != ".")


def is_within(path: Path, parent: Path) -> bool:
    """Check whether ``path`` is ``parent`` or lies below it.

    Both paths are resolved first, so symlinks and ``..`` are honoured.
    """
    resolved = path.resolve()
    resolved_parent = parent.resolve()
    return resolved == resolved_parent or resolved_parent in resolved.parents
