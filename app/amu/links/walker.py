"""Tree walker comparing a source tree with its target tree.

Walks every entry of a source directory, recursing only into real
directories, and inspects the entry at the same relative path under
the target directory. Symlinked directories in the source are terminal
entries, so the walk is bounded by the real directory depth and never
cycles.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from amu.links.models import EntryKind, WalkEntry

logger = logging.getLogger(__name__)


class TreeWalker:
    """Compares a source tree against a target tree.

    The walk is read-only. Directories that cannot be listed and entries
    that cannot be inspected are skipped; permission problems on the source root are reported by the
    status classifier before a walk is attempted.

    Args:
        source: Root of the source tree.
        target: Root of the target tree.

    Example:
        >>> walker = TreeWalker(Path("~/dotfiles/nvim"), Path("~/.config/nvim"))
        >>> for entry in walker.walk():
        ...     print(entry.relative, entry.target_kind.value)
    """

    def __init__(self, source: Path, target: Path) -> None:
        self._source = source
        self._target = target

    @property
    def source(self) -> Path:
        """Root of the source tree."""
        return self._source

    @property
    def target(self) -> Path:
        """Root of the target tree."""
        return self._target

    def walk(self) -> Iterator[WalkEntry]:
        """Yield one WalkEntry per file or symlink under the source tree.

        Entries are yielded depth-first in sorted name order.

        Yields:
            WalkEntry for each terminal source entry.
        """
        yield from self._walk_directory(Path())

    def broken_links(self) -> list[str]:
        """Relative paths whose target entry is a dangling symlink."""
        return [e.relative.as_posix() for e in self.walk() if e.is_broken_link]

    def real_files(self) -> list[str]:
        """Relative paths whose target slot is held by a real file or directory."""
        return [e.relative.as_posix() for e in self.walk() if e.is_real_file]

    def link_count(self) -> int:
        """Count relative paths whose target entry is already a symlink."""
        return sum(1 for e in self.walk() if e.is_linked)

    def links(self) -> list[tuple[str, Path]]:
        """List target symlinks that resolve into the source tree.

        Returns:
            Tuples of (relative path, link destination) in walk order.
        """
        result: list[tuple[str, Path]] = []
        for entry in self.walk():
            if not entry.is_linked:
                continue
            link_path = self._target / entry.relative
            try:
                destination = link_destination(link_path)
            except OSError:
                continue
            if destination == self._source / entry.relative:
                result.append((entry.relative.as_posix(), destination))
        return result

    def _walk_directory(self, relative: Path) -> Iterator[WalkEntry]:
        """Walk one source directory given relative to the source root.

        Args:
            relative: Directory path relative to the source root.

        Yields:
            WalkEntry for each terminal entry below the directory.
        """
        directory = self._source / relative
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return

        for entry in entries:
            entry_relative = relative / entry.name

            try:
                is_link = entry.is_symlink()
                is_dir = not is_link and entry.is_dir()
            except OSError as e:
                logger.debug("Skipping uninspectable entry %s: %s", entry, e)
                continue

            if is_dir:
                yield from self._walk_directory(entry_relative)
                continue
            source_kind = EntryKind.SYMLINK if is_link else EntryKind.FILE

            target_kind, resolves = inspect_path(self._target / entry_relative)
            yield WalkEntry(
                relative=entry_relative,
                source_kind=source_kind,
                target_kind=target_kind,
                target_resolves=resolves,
            )


def inspect_path(path: Path) -> tuple[EntryKind, bool | None]:
    """Determine the kind of a filesystem entry without following symlinks.

    Checks for symlinks first (before is_dir/exists which follow symlinks).
    A symlink resolves when either its recorded destination or the path
    itself (following the link chain) exists.

    Args:
        path: Path to classify.

    Returns:
        Tuple of (kind, resolves); resolves is None unless kind is SYMLINK.
    """
    try:
        if path.is_symlink():
            try:
                resolves = link_destination(path).exists() or path.exists()
            except OSError:
                resolves = False
            return EntryKind.SYMLINK, resolves

        if path.is_dir():
            return EntryKind.DIRECTORY, None

        if path.exists():
            return EntryKind.FILE, None
    except OSError as e:
        logger.debug("Cannot inspect %s: %s", path, e)

    return EntryKind.ABSENT, None


def link_destination(link: Path) -> Path:
    """Read a symlink and anchor a relative destination at the link's directory.

    The result is normalized lexically (``..`` collapsed) but not resolved.
    """
    destination = Path(os.readlink(link))
    if not destination.is_absolute():
        destination = link.parent / destination
    return Path(os.path.normpath(destination))
