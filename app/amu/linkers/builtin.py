"""Built-in linker implementation.

Plans and applies non-folding symlink trees in-process, without an
external executable. Plans are rendered in the same transcript format
stow prints with ``-n -v``, so both linkers share one parser and one
conflict check.
"""

import logging
import os
from pathlib import Path

from amu.core.errors import LinkToolError
from amu.linkers.base import Linker, LinkMode, split_source_path
from amu.links.models import EntryKind, LinkAction, LinkOperation, WalkEntry
from amu.links.walker import TreeWalker, link_destination

logger = logging.getLogger(__name__)


class BuiltinLinker(Linker):
    """Linker that manages symlinks directly with os.symlink.

    Every file of the source tree gets its own relative symlink in the
    target; missing directories are created as real directories. A
    target entry that is not a link, or a link owned by another source,
    is a conflict and aborts the whole operation before anything changes.
    """

    @property
    def name(self) -> str:
        """Return builtin as the linking utility."""
        return "builtin"

    def is_available(self) -> bool:
        """The built-in linker needs nothing outside the Python runtime."""
        return True

    def plan(self, mode: LinkMode, source: Path, target: Path) -> str:
        """Compute the operations for a mode and render them as a transcript."""
        _, package = split_source_path(source)
        operations = self._operations(mode, source, target)
        return render_transcript(mode, package, operations)

    def apply(self, mode: LinkMode, source: Path, target: Path) -> None:
        """Perform the operations for a mode.

        Raises:
            LinkToolError: If the target is missing, a conflict exists, or
                a filesystem call fails.
        """
        _, package = split_source_path(source)
        if not target.is_dir():
            msg = f"target directory does not exist: {target}"
            raise LinkToolError(msg)

        operations = self._operations(mode, source, target)
        if any(op.action == LinkAction.CONFLICT for op in operations):
            raise LinkToolError(render_transcript(mode, package, operations))

        for operation in operations:
            try:
                self._perform(operation, target)
            except OSError as e:
                msg = f"cannot {operation.action.name.lower()} {operation.path}: {e}"
                raise LinkToolError(msg) from e

    def _operations(self, mode: LinkMode, source: Path, target: Path) -> list[LinkOperation]:
        """Compute the ordered operations for a mode."""
        entries = list(TreeWalker(source, target).walk())

        if mode == LinkMode.REMOVE:
            return self._unlink_operations(entries, source, target)

        if mode == LinkMode.REFRESH:
            unlinks = self._unlink_operations(entries, source, target)
            relinked = {op.path for op in unlinks}
            return unlinks + self._link_operations(entries, source, target, relinked)

        return self._link_operations(entries, source, target, set())

    def _unlink_operations(
        self,
        entries: list[WalkEntry],
        source: Path,
        target: Path,
    ) -> list[LinkOperation]:
        """UNLINK every target symlink that points at its source entry."""
        return [
            LinkOperation(LinkAction.UNLINK, entry.relative.as_posix())
            for entry in entries
            if entry.is_linked and _is_owned(entry, source, target)
        ]

    def _link_operations(
        self,
        entries: list[WalkEntry],
        source: Path,
        target: Path,
        removed: set[str],
    ) -> list[LinkOperation]:
        """Compute LINK, SKIP and CONFLICT operations for a create.

        Args:
            entries: Walk of the source tree against the target.
            source: Source directory.
            target: Target directory.
            removed: Relative paths already scheduled for UNLINK.
        """
        operations: list[LinkOperation] = []
        for entry in entries:
            relative = entry.relative.as_posix()
            link_path = target / entry.relative
            destination = os.path.relpath(source / entry.relative, link_path.parent)

            blocker = _blocking_parent(target, entry.relative)
            if blocker is not None:
                operations.append(
                    LinkOperation(
                        LinkAction.CONFLICT,
                        blocker,
                        f"existing target is neither a link nor a directory: {blocker}",
                    )
                )
                continue

            if entry.target_kind == EntryKind.ABSENT or relative in removed:
                operations.append(LinkOperation(LinkAction.LINK, relative, destination))
            elif entry.target_kind == EntryKind.SYMLINK:
                if _is_owned(entry, source, target):
                    operations.append(LinkOperation(LinkAction.SKIP, relative, destination))
                elif not entry.target_resolves:
                    # Dangling links are replaced
                    operations.append(LinkOperation(LinkAction.UNLINK, relative))
                    operations.append(LinkOperation(LinkAction.LINK, relative, destination))
                else:
                    operations.append(
                        LinkOperation(
                            LinkAction.CONFLICT,
                            relative,
                            f"existing target is not owned by stow: {relative}",
                        )
                    )
            elif entry.target_kind == EntryKind.DIRECTORY:
                operations.append(
                    LinkOperation(
                        LinkAction.CONFLICT,
                        relative,
                        f"existing target is a directory: {relative}",
                    )
                )
            else:
                operations.append(
                    LinkOperation(
                        LinkAction.CONFLICT,
                        relative,
                        f"existing target is neither a link nor a directory: {relative}",
                    )
                )
        return operations

    @staticmethod
    def _perform(operation: LinkOperation, target: Path) -> None:
        """Execute a single LINK or UNLINK operation."""
        link_path = target / operation.path
        if operation.action == LinkAction.UNLINK:
            logger.debug("Unlinking %s", link_path)
            link_path.unlink()
        elif operation.action == LinkAction.LINK and operation.detail is not None:
            logger.debug("Linking %s -> %s", link_path, operation.detail)
            link_path.parent.mkdir(parents=True, exist_ok=True)
            link_path.symlink_to(operation.detail)


def render_transcript(mode: LinkMode, package: str, operations: list[LinkOperation]) -> str:
    """Render operations in stow's verbose simulation format.

    Args:
        mode: Operation that was planned.
        package: Leaf name of the source directory.
        operations: Planned operations.

    Returns:
        Transcript text, empty when there is nothing to report.
    """
    lines: list[str] = []
    conflicts = [op for op in operations if op.action == LinkAction.CONFLICT]

    if conflicts:
        verb = "unstowing" if mode == LinkMode.REMOVE else "stowing"
        lines.append(f"WARNING! {verb} {package} would cause conflicts:")
        lines.extend(f"  * {op.detail}" for op in conflicts)
        lines.append("All operations aborted.")
    else:
        for op in operations:
            if op.action == LinkAction.LINK:
                lines.append(f"LINK: {op.path} => {op.detail}")
            elif op.action == LinkAction.UNLINK:
                lines.append(f"UNLINK: {op.path}")
            elif op.action == LinkAction.SKIP:
                lines.append(f"--- Skipping {op.path} as it already points to {op.detail}")

    return "\n".join(lines) + "\n" if lines else ""


def _is_owned(entry: WalkEntry, source: Path, target: Path) -> bool:
    """Check if the target symlink of an entry points at the source entry."""
    try:
        return link_destination(target / entry.relative) == source / entry.relative
    except OSError:
        return False


def _blocking_parent(target: Path, relative: Path) -> str | None:
    """Find an ancestor of a target slot that exists but is not a directory."""
    for parent in reversed(relative.parents[:-1]):
        path = target / parent
        if (path.exists() or path.is_symlink()) and not path.is_dir():
            return parent.as_posix()
    return None
