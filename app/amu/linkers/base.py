"""Abstract base class for linkers.

A linker plans or applies a non-folding symlink tree from a source
directory into a target directory. Every backend addresses a source by
its parent directory and leaf name, the way GNU Stow addresses packages.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from amu.core.errors import LinkToolError, LinkToolNotFoundError
from amu.linkers.plan import parse_plan
from amu.links.models import LinkOperation


class LinkMode(str, Enum):
    """Operation a linker performs.

    Attributes:
        CREATE: Link every source entry into the target.
        REMOVE: Remove the links that point into the source.
        REFRESH: Remove then recreate the links.
    """

    CREATE = "create"
    REMOVE = "remove"
    REFRESH = "refresh"


class Linker(ABC):
    """Abstract base class for all linkers.

    ``plan`` is the simulate mode: it never touches the filesystem and
    returns the diagnostic transcript describing what ``apply`` would do.

    Example:
        >>> linker = StowLinker()
        >>> if linker.is_available():
        ...     print(linker.plan_create(source, target))
        ...     linker.apply_create(source, target)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the linking utility."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this linker can be used on the system.

        Returns:
            True if the linker can be used, False otherwise.
        """

    @abstractmethod
    def plan(self, mode: LinkMode, source: Path, target: Path) -> str:
        """Simulate an operation and return its diagnostic transcript.

        Args:
            mode: Operation to simulate.
            source: Source directory.
            target: Target directory.

        Returns:
            Diagnostic text describing the planned operations.

        Raises:
            LinkToolError: If the source path cannot be split or the
                linker cannot be run.
        """

    @abstractmethod
    def apply(self, mode: LinkMode, source: Path, target: Path) -> None:
        """Perform an operation.

        Args:
            mode: Operation to perform.
            source: Source directory.
            target: Target directory.

        Raises:
            LinkToolError: If the operation fails, carrying the diagnostics.
        """

    def ensure_available(self) -> None:
        """Raise if the linker cannot be used.

        Raises:
            LinkToolNotFoundError: If the linking utility is missing.
        """
        if not self.is_available():
            raise LinkToolNotFoundError(self.name)

    def plan_create(self, source: Path, target: Path) -> str:
        """Simulate linking a source into a target."""
        return self.plan(LinkMode.CREATE, source, target)

    def plan_remove(self, source: Path, target: Path) -> str:
        """Simulate unlinking a source from a target."""
        return self.plan(LinkMode.REMOVE, source, target)

    def plan_refresh(self, source: Path, target: Path) -> str:
        """Simulate relinking a source into a target."""
        return self.plan(LinkMode.REFRESH, source, target)

    def apply_create(self, source: Path, target: Path) -> None:
        """Link a source into a target."""
        self.apply(LinkMode.CREATE, source, target)

    def apply_remove(self, source: Path, target: Path) -> None:
        """Unlink a source from a target."""
        self.apply(LinkMode.REMOVE, source, target)

    def apply_refresh(self, source: Path, target: Path) -> None:
        """Relink a source into a target."""
        self.apply(LinkMode.REFRESH, source, target)

    def simulate(self, mode: LinkMode, source: Path, target: Path) -> list[LinkOperation]:
        """Simulate an operation and parse the transcript for display.

        Returns:
            Parsed operations in transcript order.
        """
        return parse_plan(self.plan(mode, source, target))


def split_source_path(source: Path) -> tuple[Path, str]:
    """Split a source directory into its parent and leaf name.

    Args:
        source: Source directory.

    Returns:
        Tuple of (parent directory, directory name).

    Raises:
        LinkToolError: If the path has no parent or no name component.
    """
    name = source.name
    if not name:
        msg = f"Invalid source path: no directory name: {source}"
        raise LinkToolError(msg)
    parent = source.parent
    if parent == source or not str(parent):
        msg = f"Invalid source path: no parent directory: {source}"
        raise LinkToolError(msg)
    return parent, name
