"""Mirror engine for assetsync - filtered, rebuild-from-scratch tree copies."""

from .config import DEFAULT_DESTINATION, DEFAULT_SOURCE, SyncConfig
from .engine import SyncEngine
from .exclusion import (
    DEFAULT_IGNORE_NAME,
    AnyExclusion,
    ExclusionRule,
    GlobExclusion,
    SegmentExclusion,
    build_exclusion,
)
from .operations import Operation, OperationKind, TreeOperations
from .reporter import RunReporter
from .scanner import EntryKind, SourceEntry, TreeScanner

__all__ = [
    "SyncEngine",
    "SyncConfig",
    "DEFAULT_SOURCE",
    "DEFAULT_DESTINATION",
    "DEFAULT_IGNORE_NAME",
    "ExclusionRule",
    "SegmentExclusion",
    "GlobExclusion",
    "AnyExclusion",
    "build_exclusion",
    "Operation",
    "OperationKind",
    "TreeOperations",
    "RunReporter",
    "EntryKind",
    "SourceEntry",
    "TreeScanner",
]
