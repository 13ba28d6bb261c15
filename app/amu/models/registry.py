"""Registry model for source/target bindings.

This module defines the Pydantic model holding which source directories
are merged into which target directory.
"""

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from amu.core.errors import AlreadyRegisteredError, NotRegisteredError


class Registry(BaseModel):
    """Mapping of target directories to their registered source directories.

    Targets iterate in sorted order. Sources keep their insertion order,
    which is used for display only. All paths are absolute.

    Attributes:
        targets: Target path mapped to its ordered list of source paths.
    """

    model_config = ConfigDict(extra="forbid")

    targets: Annotated[
        dict[Path, list[Path]],
        Field(default_factory=dict, description="Target directory to source directories"),
    ]

    @field_validator("targets")
    @classmethod
    def validate_targets(cls, value: dict[Path, list[Path]]) -> dict[Path, list[Path]]:
        """Reject relative paths, duplicate sources and empty source lists."""
        for target, sources in value.items():
            if not target.is_absolute():
                msg = f"Target path must be absolute: {target}"
                raise ValueError(msg)
            if not sources:
                msg = f"Target has no sources: {target}"
                raise ValueError(msg)
            for source in sources:
                if not source.is_absolute():
                    msg = f"Source path must be absolute: {source}"
                    raise ValueError(msg)
            if len(set(sources)) != len(sources):
                msg = f"Duplicate sources registered for {target}"
                raise ValueError(msg)
        return value

    @property
    def is_empty(self) -> bool:
        """Check if no target is registered."""
        return not self.targets

    def add(self, target: Path, source: Path) -> None:
        """Register a source for a target.

        Args:
            target: Absolute target directory.
            source: Absolute source directory.

        Raises:
            ValueError: If either path is relative.
            AlreadyRegisteredError: If the source is already listed for the target.
        """
        for path in (target, source):
            if not path.is_absolute():
                msg = f"Registered paths must be absolute: {path}"
                raise ValueError(msg)
        sources = self.targets.get(target, [])
        if source in sources:
            raise AlreadyRegisteredError(source, target)
        self.targets[target] = [*sources, source]

    def remove(self, target: Path, source: Path) -> None:
        """Unregister a source from a target.

        The target entry is dropped once its last source is removed.

        Args:
            target: Absolute target directory.
            source: Absolute source directory.

        Raises:
            NotRegisteredError: If the target or the source is not registered.
        """
        sources = self.targets.get(target)
        if sources is None or source not in sources:
            raise NotRegisteredError(source, target)

        remaining = [s for s in sources if s != source]
        if remaining:
            self.targets[target] = remaining
        else:
            del self.targets[target]

    def sources_of(self, target: Path) -> list[Path] | None:
        """Get the sources registered for a target, or None if unregistered."""
        sources = self.targets.get(target)
        if sources is None:
            return None
        return list(sources)

    def target_paths(self) -> list[Path]:
        """Get all registered targets in sorted order."""
        return sorted(self.targets)

    def targets_for_source(self, source: Path) -> list[Path]:
        """Get every target (sorted) that has the given source registered."""
        return [t for t in self.target_paths() if source in self.targets[t]]

    def clear_target(self, target: Path) -> list[Path]:
        """Drop a target and all of its sources.

        Args:
            target: Absolute target directory.

        Returns:
            The sources that were registered for the target.

        Raises:
            KeyError: If the target is not registered.
        """
        return self.targets.pop(target)
