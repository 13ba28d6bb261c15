"""Link domain models.

This module defines the data structures produced while comparing a
source tree with its target tree, and the link operations parsed from
a linker's plan.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Type of filesystem entry found at one side of a relative path.

    Attributes:
        ABSENT: Nothing exists at the path (not even a dangling symlink).
        SYMLINK: Symbolic link, live or dangling.
        FILE: Regular file (or any other non-directory entry).
        DIRECTORY: Real directory.
    """

    ABSENT = "absent"
    SYMLINK = "symlink"
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """Comparison of one source-tree entry with its target counterpart.

    Attributes:
        relative: Path relative to the source and target roots.
        source_kind: Kind of the source entry (FILE or SYMLINK).
        target_kind: Kind of the target entry.
        target_resolves: For symlink targets, whether the link destination
            exists; None for any other target kind.
    """

    relative: Path
    source_kind: EntryKind
    target_kind: EntryKind
    target_resolves: bool | None = None

    @property
    def is_broken_link(self) -> bool:
        """Target is a symlink pointing at something that does not exist."""
        return self.target_kind == EntryKind.SYMLINK and self.target_resolves is False

    @property
    def is_real_file(self) -> bool:
        """A non-link target entry occupies a slot expected to be a managed link."""
        return self.source_kind == EntryKind.FILE and self.target_kind in (
            EntryKind.FILE,
            EntryKind.DIRECTORY,
        )

    @property
    def is_linked(self) -> bool:
        """Target entry is currently a symlink."""
        return self.target_kind == EntryKind.SYMLINK


class LinkAction(str, Enum):
    """Action a linker reports for one entry in a simulated run.

    Attributes:
        LINK: A symlink would be created.
        UNLINK: A symlink would be removed.
        SKIP: The entry is already in the desired state.
        CONFLICT: The entry blocks the operation.
    """

    LINK = "would-link"
    UNLINK = "would-unlink"
    SKIP = "would-skip"
    CONFLICT = "conflict"


@dataclass(frozen=True, slots=True)
class LinkOperation:
    """A single entry of a linker plan.

    Attributes:
        action: What the linker would do.
        path: Target-relative path the action applies to.
        detail: Remainder of the plan line (link destination or conflict text).
    """

    action: LinkAction
    path: str
    detail: str | None = None

    def __post_init__(self) -> None:
        """Validate operation data after initialization."""
        if not self.path:
            msg = "Link operation path cannot be empty"
            raise ValueError(msg)
