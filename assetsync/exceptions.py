"""Exceptions raised by assetsync."""

from pathlib import Path
from typing import Optional

import click


class AssetSyncError(Exception):
    """Base exception for all assetsync errors."""

    exit_code = 1

    def __init__(self, message: str):
        """Initialize the error.

        Args:
            message: Human-readable error message
        """
        super().__init__(message)
        self.message = message


class InvalidArgumentError(click.UsageError):
    """Raised for an unrecognized command line token.

    Subclasses click's usage error so click prints the usage text and
    exits with status 2.
    """

    exit_code = 2

    def __init__(self, token: str, ctx: Optional[click.Context] = None):
        super().__init__(f"Unknown argument: {token}", ctx=ctx)
        self.token = token


class SourceMissingError(AssetSyncError):
    """Raised when the source root is absent or not a directory."""

    def __init__(self, path: Path, reason: str = "does not exist"):
        super().__init__(f"Source directory {reason}: {path}")
        self.path = path


class SyncConfigError(AssetSyncError):
    """Raised when a sync configuration cannot be used."""


class SyncIOError(AssetSyncError):
    """Raised when a filesystem operation fails during a sync.

    The original ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, message: str, operation=None):
        super().__init__(message)
        self.operation = operation
