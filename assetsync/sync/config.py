"""Configuration for a single mirror run."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Union

from ..exceptions import SyncConfigError
from .exclusion import ExclusionRule, SegmentExclusion, build_exclusion

DEFAULT_SOURCE = Path("assets")
"""Asset tree mirrored by default (relative to the working directory)"""

DEFAULT_DESTINATION = Path("www") / "public" / "assets"
"""Public asset directory of the web build"""


@dataclass(frozen=True)
class SyncConfig:
    """Immutable settings for one mirror run.

    Examples:
        >>> config = SyncConfig(dry_run=True)
        >>> config.source
        PosixPath('assets')
        >>> config.with_dry_run(False).dry_run
        False
    """

    source: Path = DEFAULT_SOURCE
    """Root of the tree to mirror"""

    destination: Path = DEFAULT_DESTINATION
    """Root of the tree to rebuild"""

    dry_run: bool = False
    """If True, report the plan without touching the filesystem"""

    exclusion: ExclusionRule = field(default_factory=SegmentExclusion)
    """Predicate selecting subtrees that are never copied"""

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "source", Path(self.source))
        object.__setattr__(self, "destination", Path(self.destination))
        object.__setattr__(self, "dry_run", bool(self.dry_run))
        object.__setattr__(self, "exclusion", build_exclusion(self.exclusion))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncConfig":
        """Create a config from a dictionary.

        Recognised keys: ``source``, ``destination``, ``dryRun`` (or
        ``dry_run``) and ``ignore`` (a name or list of names/glob patterns).

        Raises:
            SyncConfigError: If the dictionary has unknown keys
        """
        known = {"source", "destination", "dryRun", "dry_run", "ignore"}
        unknown = set(data) - known
        if unknown:
            raise SyncConfigError(
                f"Unknown configuration key(s): {', '.join(sorted(unknown))}"
            )

        kwargs: dict[str, Union[Path, bool, ExclusionRule]] = {}
        if "source" in data:
            kwargs["source"] = Path(data["source"])
        if "destination" in data:
            kwargs["destination"] = Path(data["destination"])
        if "dryRun" in data or "dry_run" in data:
            kwargs["dry_run"] = bool(data.get("dryRun", data.get("dry_run")))
        if "ignore" in data:
            kwargs["exclusion"] = build_exclusion(data["ignore"])
        return cls(**kwargs)  # type: ignore[arg-type]

    def with_dry_run(self, dry_run: bool) -> "SyncConfig":
        """Return a copy of this config with ``dry_run`` replaced."""
        return replace(self, dry_run=dry_run)
