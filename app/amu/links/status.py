"""Status classification for registered source/target pairs.

Each registered pair is classified into exactly one status, evaluated
in a fixed priority order. A status is a pure function of the current
filesystem state and is never persisted.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from amu.core.errors import LinkToolError
from amu.links.walker import TreeWalker

if TYPE_CHECKING:
    from amu.linkers.base import Linker

logger = logging.getLogger(__name__)

# Substrings in a simulated plan that mark a conflict
CONFLICT_MARKERS: tuple[str, ...] = ("CONFLICT", "existing target")

# Number of non-blank diagnostic lines shown for a conflict
CONFLICT_DISPLAY_LINES = 5


class StatusKind(str, Enum):
    """Kind of a source status, listed in evaluation priority order.

    Attributes:
        SOURCE_NOT_FOUND: The source directory does not exist.
        TARGET_NOT_FOUND: The target directory does not exist.
        PERMISSION_DENIED: The source directory cannot be read or the target
            directory cannot be searched.
        BROKEN_LINKS: Target holds symlinks whose destination is gone.
        REAL_FILES: Target holds real files where links are expected.
        CONFLICTS: The linker reports conflicts when simulating.
        OK: Everything is in place.
    """

    SOURCE_NOT_FOUND = "source_not_found"
    TARGET_NOT_FOUND = "target_not_found"
    PERMISSION_DENIED = "permission_denied"
    BROKEN_LINKS = "broken_links"
    REAL_FILES = "real_files"
    CONFLICTS = "conflicts"
    OK = "ok"


_LABELS: dict[StatusKind, str] = {
    StatusKind.SOURCE_NOT_FOUND: "source not found",
    StatusKind.TARGET_NOT_FOUND: "target not found",
    StatusKind.PERMISSION_DENIED: "permission denied",
    StatusKind.BROKEN_LINKS: "broken links",
    StatusKind.REAL_FILES: "real files found",
    StatusKind.CONFLICTS: "conflicts detected",
}


@dataclass(frozen=True, slots=True)
class SourceStatus:
    """Status of one source relative to its target.

    A tagged value: ``kind`` decides which of the payload fields is
    meaningful. Use the ``SourceStatus.<kind>()`` constructors rather
    than building instances directly.

    Attributes:
        kind: Which status applies.
        paths: Relative paths for BROKEN_LINKS and REAL_FILES.
        diagnostics: Raw linker output for CONFLICTS.
        link_count: Number of linked entries for OK.
    """

    kind: StatusKind
    paths: tuple[str, ...] = field(default=())
    diagnostics: str | None = None
    link_count: int = 0

    @classmethod
    def ok(cls, link_count: int) -> SourceStatus:
        return cls(StatusKind.OK, link_count=link_count)

    @classmethod
    def source_not_found(cls) -> SourceStatus:
        return cls(StatusKind.SOURCE_NOT_FOUND)

    @classmethod
    def target_not_found(cls) -> SourceStatus:
        return cls(StatusKind.TARGET_NOT_FOUND)

    @classmethod
    def permission_denied(cls) -> SourceStatus:
        return cls(StatusKind.PERMISSION_DENIED)

    @classmethod
    def broken_links(cls, paths: list[str]) -> SourceStatus:
        return cls(StatusKind.BROKEN_LINKS, paths=tuple(paths))

    @classmethod
    def real_files(cls, paths: list[str]) -> SourceStatus:
        return cls(StatusKind.REAL_FILES, paths=tuple(paths))

    @classmethod
    def conflicts(cls, diagnostics: str) -> SourceStatus:
        return cls(StatusKind.CONFLICTS, diagnostics=diagnostics)

    @property
    def label(self) -> str:
        """Short human-readable description of the status."""
        if self.kind == StatusKind.OK:
            noun = "link" if self.link_count == 1 else "links"
            return f"OK, {self.link_count} {noun}"
        return _LABELS[self.kind]

    def diagnostic_lines(self, limit: int = CONFLICT_DISPLAY_LINES) -> list[str]:
        """First ``limit`` non-blank diagnostic lines, stripped."""
        if not self.diagnostics:
            return []
        lines = [line.strip() for line in self.diagnostics.splitlines() if line.strip()]
        return lines[:limit]

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, object] = {"status": self.kind.value}
        if self.kind == StatusKind.OK:
            data["link_count"] = self.link_count
        elif self.kind == StatusKind.BROKEN_LINKS:
            data["broken_links"] = list(self.paths)
        elif self.kind == StatusKind.REAL_FILES:
            data["real_files"] = list(self.paths)
        elif self.kind == StatusKind.CONFLICTS:
            data["conflicts"] = self.diagnostic_lines()
        return data


def has_conflict_marker(diagnostics: str) -> bool:
    """Check if a simulated plan reports a conflict."""
    return any(marker in diagnostics for marker in CONFLICT_MARKERS)


def check_source_status(source: Path, target: Path, linker: Linker) -> SourceStatus:
    """Classify a registered source/target pair.

    Evaluation order:
    1. Source unreadable -> PERMISSION_DENIED; missing or otherwise
       unreachable -> SOURCE_NOT_FOUND
    2. Target not searchable -> PERMISSION_DENIED; missing or otherwise
       unreachable -> TARGET_NOT_FOUND
    3. Dangling symlinks in the target -> BROKEN_LINKS
    4. Real files in link slots -> REAL_FILES
    5. Conflict markers in the simulated create plan -> CONFLICTS
    6. Otherwise OK with the number of linked entries

    Args:
        source: Registered source directory.
        target: Registered target directory.
        linker: Linker used to simulate the create operation.

    Returns:
        The single status that applies.
    """
    try:
        with os.scandir(source):
            pass
    except PermissionError:
        return SourceStatus.permission_denied()
    except OSError as e:
        logger.debug("Cannot read source %s: %s", source, e)
        return SourceStatus.source_not_found()

    try:
        target_is_dir = target.is_dir()
    except PermissionError:
        return SourceStatus.permission_denied()
    except OSError as e:
        logger.debug("Cannot inspect target %s: %s", target, e)
        target_is_dir = False
    if not target_is_dir:
        return SourceStatus.target_not_found()

    walker = TreeWalker(source, target)

    broken = walker.broken_links()
    if broken:
        return SourceStatus.broken_links(broken)

    real_files = walker.real_files()
    if real_files:
        return SourceStatus.real_files(real_files)

    try:
        diagnostics = linker.plan_create(source, target)
    except LinkToolError as e:
        logger.warning("Could not simulate linking %s into %s: %s", source, target, e)
    else:
        if has_conflict_marker(diagnostics):
            return SourceStatus.conflicts(diagnostics)

    return SourceStatus.ok(walker.link_count())
