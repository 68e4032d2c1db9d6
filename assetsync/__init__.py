"""assetsync - mirror a static asset tree, skipping ignored subtrees."""

__version__ = "0.1.0"

from .exceptions import (  # noqa: E402
    AssetSyncError,
    InvalidArgumentError,
    SourceMissingError,
    SyncConfigError,
    SyncIOError,
)
from .sync import SyncConfig, SyncEngine  # noqa: E402

__all__ = [
    "__version__",
    "AssetSyncError",
    "InvalidArgumentError",
    "SourceMissingError",
    "SyncConfigError",
    "SyncIOError",
    "SyncConfig",
    "SyncEngine",
]
