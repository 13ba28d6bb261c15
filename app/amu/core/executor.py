"""Linker selection and batch execution of link operations.

Provides the linker factory used by the CLI and the per-pair execution
shared by the batch commands (update, restore, clear). A failure on one
pair is recorded in its result and never aborts the remaining pairs.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from amu.core.errors import LinkToolError
from amu.linkers.base import Linker, LinkMode
from amu.linkers.builtin import BuiltinLinker
from amu.linkers.plan import parse_plan
from amu.linkers.stow import StowLinker
from amu.links.status import has_conflict_marker

if TYPE_CHECKING:
    from pathlib import Path

    from amu.links.models import LinkOperation

logger = logging.getLogger(__name__)

# Environment variable selecting the linker backend
LINKER_ENV_VAR = "AMU_LINKER"

DEFAULT_LINKER = "stow"

LINKERS: dict[str, type[Linker]] = {
    "stow": StowLinker,
    "builtin": BuiltinLinker,
}


def get_linker(name: str | None = None) -> Linker:
    """Get a linker instance by name.

    Args:
        name: Linker name. If None, uses $AMU_LINKER, falling back to stow.

    Returns:
        Linker instance.

    Raises:
        ValueError: If the name does not match a known linker.
    """
    if name is None:
        name = os.environ.get(LINKER_ENV_VAR) or DEFAULT_LINKER

    linker_class = LINKERS.get(name.strip().lower())
    if linker_class is None:
        known = ", ".join(sorted(LINKERS))
        msg = f"Unknown linker '{name}' (expected one of: {known})"
        raise ValueError(msg)
    return linker_class()


def get_available_linker(name: str | None = None) -> Linker:
    """Get a linker instance and make sure it can be used.

    Raises:
        ValueError: If the name does not match a known linker.
        LinkToolNotFoundError: If the linking utility is not installed.
    """
    linker = get_linker(name)
    linker.ensure_available()
    logger.debug("Using %s linker", linker.name)
    return linker


@dataclass(frozen=True, slots=True)
class LinkResult:
    """Outcome of running one link operation for a source/target pair.

    Attributes:
        source: Source directory.
        target: Target directory.
        mode: Operation that was run.
        success: Whether the operation completed (or would complete).
        skipped: True if the source no longer exists.
        dry_run: True if the operation was only simulated.
        error: Linker diagnostics if the operation failed.
        operations: Planned operations (dry runs only).
    """

    source: Path
    target: Path
    mode: LinkMode
    success: bool
    skipped: bool = False
    dry_run: bool = False
    error: str | None = None
    operations: tuple[LinkOperation, ...] = ()

    @property
    def failed(self) -> bool:
        """Check if the operation was attempted and failed."""
        return not self.success and not self.skipped


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Counters over the results of a batch run."""

    succeeded: int = 0
    failed: int = 0
    skipped: int = 0

    @classmethod
    def from_results(cls, results: list[LinkResult]) -> BatchSummary:
        """Count succeeded, failed and skipped results."""
        return cls(
            succeeded=sum(1 for r in results if r.success),
            failed=sum(1 for r in results if r.failed),
            skipped=sum(1 for r in results if r.skipped),
        )

    @property
    def exit_code(self) -> int:
        """Process exit code: 1 if any operation failed."""
        return 1 if self.failed else 0


def execute_link(
    linker: Linker,
    mode: LinkMode,
    source: Path,
    target: Path,
    *,
    dry_run: bool = False,
) -> LinkResult:
    """Run one link operation, converting linker failures into a result.

    Sources that no longer exist are skipped rather than failed.

    Args:
        linker: Linker to run.
        mode: Operation to run.
        source: Source directory.
        target: Target directory.
        dry_run: If True, simulate and collect the planned operations.

    Returns:
        LinkResult describing the outcome.
    """
    if not source.is_dir():
        logger.info("Skipping missing source %s", source)
        return LinkResult(source, target, mode, success=False, skipped=True, dry_run=dry_run)

    try:
        if dry_run:
            transcript = linker.plan(mode, source, target)
            conflicted = has_conflict_marker(transcript)
            return LinkResult(
                source,
                target,
                mode,
                success=not conflicted,
                dry_run=True,
                error=transcript.strip() if conflicted else None,
                operations=tuple(parse_plan(transcript)),
            )
        linker.apply(mode, source, target)
    except LinkToolError as e:
        logger.warning("Failed to %s %s in %s: %s", mode.value, source, target, e)
        return LinkResult(
            source,
            target,
            mode,
            success=False,
            dry_run=dry_run,
            error=e.diagnostics.strip(),
        )

    return LinkResult(source, target, mode, success=True)


def execute_pairs(
    linker: Linker,
    mode: LinkMode,
    pairs: list[tuple[Path, Path]],
    *,
    dry_run: bool = False,
) -> list[LinkResult]:
    """Run one link operation for every (target, source) pair in order.

    Args:
        linker: Linker to run.
        mode: Operation to run.
        pairs: (target, source) pairs in registry order.
        dry_run: If True, only simulate.

    Returns:
        One LinkResult per pair.
    """
    return [
        execute_link(linker, mode, source, target, dry_run=dry_run) for target, source in pairs
    ]
