"""Exclusion rules deciding which source subtrees are never copied.

Rules are evaluated against paths relative to the source root (POSIX
separators). The scanner checks every entry before descending into it, so a
rule that matches a directory removes that directory's whole subtree.

Examples:
    >>> rule = SegmentExclusion("ignore")
    >>> rule.matches("logos/ignore")
    True
    >>> rule.matches("logos/ignored.png")
    False
    >>> GlobExclusion("*.psd").matches("art/cover.psd")
    True
"""

import fnmatch
import logging
from typing import Union

from ..utils import path_segments

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_NAME = "ignore"
"""Name of the directory whose subtree is never mirrored"""


class ExclusionRule:
    """Base class for exclusion predicates."""

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check whether a path is excluded.

        Args:
            relative_path: Path relative to the source root
            is_dir: Whether the path is a directory

        Returns:
            True if the path (and any subtree below it) must be skipped
        """
        raise NotImplementedError

    def __call__(self, relative_path: str, is_dir: bool = False) -> bool:
        return self.matches(relative_path, is_dir=is_dir)


class SegmentExclusion(ExclusionRule):
    """Excludes any path that has a segment equal to one of ``names``.

    Matching is literal and case-sensitive.
    """

    def __init__(self, *names: str):
        self.names = frozenset(names or (DEFAULT_IGNORE_NAME,))

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        return any(segment in self.names for segment in path_segments(relative_path))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SegmentExclusion) and other.names == self.names

    def __hash__(self) -> int:
        return hash(self.names)

    def __repr__(self) -> str:
        return f"SegmentExclusion({', '.join(repr(n) for n in sorted(self.names))})"


class GlobExclusion(ExclusionRule):
    """Excludes any path with a segment matching a shell-style pattern.

    Patterns containing a ``/`` are matched against the whole relative path
    instead of single segments.
    """

    def __init__(self, *patterns: str):
        self.patterns = tuple(patterns)

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        segments = path_segments(relative_path)
        full_path = "/".join(segments)
        for pattern in self.patterns:
            if "/" in pattern:
                if fnmatch.fnmatchcase(full_path, pattern.strip("/")):
                    return True
            elif any(fnmatch.fnmatchcase(segment, pattern) for segment in segments):
                return True
        return False

    def __repr__(self) -> str:
        return f"GlobExclusion({', '.join(repr(p) for p in self.patterns)})"


class AnyExclusion(ExclusionRule):
    """Excludes a path when any of the wrapped rules excludes it."""

    def __init__(self, *rules: ExclusionRule):
        self.rules = tuple(rules)

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        return any(rule.matches(relative_path, is_dir=is_dir) for rule in self.rules)

    def __repr__(self) -> str:
        return f"AnyExclusion({', '.join(repr(r) for r in self.rules)})"


ExclusionLike = Union[ExclusionRule, str, list, tuple, None]


def build_exclusion(value: ExclusionLike) -> ExclusionRule:
    """Build an exclusion rule from a rule, a name or a list of names.

    Args:
        value: An existing rule, a single name, a list of names/glob
            patterns, or None for the default ``ignore`` rule

    Returns:
        ExclusionRule instance

    Examples:
        >>> build_exclusion(None)
        SegmentExclusion('ignore')
        >>> build_exclusion(["ignore", "*.tmp"])
        AnyExclusion(SegmentExclusion('ignore'), GlobExclusion('*.tmp'))
    """
    if value is None:
        return SegmentExclusion(DEFAULT_IGNORE_NAME)
    if isinstance(value, ExclusionRule):
        return value
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"Unsupported exclusion value: {value!r}")

    names = [item for item in value if not _is_glob(item)]
    patterns = [item for item in value if _is_glob(item)]
    rules: list[ExclusionRule] = []
    if names:
        rules.append(SegmentExclusion(*names))
    if patterns:
        rules.append(GlobExclusion(*patterns))
    if len(rules) == 1:
        return rules[0]
    logger.debug("Combining exclusion rules: %s", rules)
    return AnyExclusion(*rules)


def _is_glob(value: str) -> bool:
    return any(char in value for char in "*?[/")
