"""Aggregation of source statuses into per-target and overall summaries.

This module maps every status kind to a severity and folds the
statuses of a command run into counters that decide the exit code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from amu.links.status import SourceStatus, StatusKind, check_source_status

if TYPE_CHECKING:
    from amu.linkers.base import Linker


class Severity(str, Enum):
    """Severity of a source status.

    Attributes:
        OK: Nothing to do.
        WARNING: The pair is registered and reachable but diverges.
        ERROR: The pair cannot be evaluated.
    """

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


SEVERITY: dict[StatusKind, Severity] = {
    StatusKind.OK: Severity.OK,
    StatusKind.BROKEN_LINKS: Severity.WARNING,
    StatusKind.REAL_FILES: Severity.WARNING,
    StatusKind.CONFLICTS: Severity.WARNING,
    StatusKind.SOURCE_NOT_FOUND: Severity.ERROR,
    StatusKind.TARGET_NOT_FOUND: Severity.ERROR,
    StatusKind.PERMISSION_DENIED: Severity.ERROR,
}

_unmapped = set(StatusKind) - set(SEVERITY)
if _unmapped:
    raise RuntimeError(f"Status kinds without a severity: {sorted(k.value for k in _unmapped)}")


def severity_of(status: SourceStatus) -> Severity:
    """Get the severity of a status."""
    return SEVERITY[status.kind]


@dataclass(frozen=True, slots=True)
class SourceReport:
    """Status of one registered source.

    Attributes:
        source: Registered source directory.
        status: Classified status of the source.
    """

    source: Path
    status: SourceStatus

    @property
    def severity(self) -> Severity:
        """Severity of the source's status."""
        return severity_of(self.status)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {"source": str(self.source), **self.status.to_dict()}


@dataclass(frozen=True, slots=True)
class TargetReport:
    """Statuses of all sources registered for one target.

    Attributes:
        target: Registered target directory.
        sources: Reports in registration order.
    """

    target: Path
    sources: tuple[SourceReport, ...]

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "target": str(self.target),
            "sources": [s.to_dict() for s in self.sources],
        }


@dataclass(frozen=True, slots=True)
class StatusSummary:
    """Counters of evaluated pairs by severity.

    Attributes:
        ok: Pairs with OK severity.
        warning: Pairs with WARNING severity.
        error: Pairs with ERROR severity.
    """

    ok: int = 0
    warning: int = 0
    error: int = 0

    @property
    def total(self) -> int:
        """Number of evaluated pairs."""
        return self.ok + self.warning + self.error

    @property
    def has_issues(self) -> bool:
        """Check if any pair has a warning or an error."""
        return self.warning + self.error > 0

    @property
    def exit_code(self) -> int:
        """Process exit code derived from the counters."""
        return 1 if self.has_issues else 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            "ok": self.ok,
            "warning": self.warning,
            "error": self.error,
            "total": self.total,
        }


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Result of classifying every selected pair.

    Attributes:
        targets: Per-target reports in registry order.
    """

    targets: tuple[TargetReport, ...]

    @property
    def summary(self) -> StatusSummary:
        """Fold all source statuses into severity counters."""
        counts = dict.fromkeys(Severity, 0)
        for target in self.targets:
            for source in target.sources:
                counts[source.severity] += 1
        return StatusSummary(
            ok=counts[Severity.OK],
            warning=counts[Severity.WARNING],
            error=counts[Severity.ERROR],
        )

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "targets": [t.to_dict() for t in self.targets],
            "summary": self.summary.to_dict(),
        }


def build_report(selection: list[tuple[Path, list[Path]]], linker: Linker) -> StatusReport:
    """Classify every (target, sources) pair in order.

    Args:
        selection: Targets with their registered sources, in display order.
        linker: Linker used by the classifier to simulate linking.

    Returns:
        StatusReport covering every pair of the selection.
    """
    reports: list[TargetReport] = []
    for target, sources in selection:
        source_reports = tuple(
            SourceReport(source=source, status=check_source_status(source, target, linker))
            for source in sources
        )
        reports.append(TargetReport(target=target, sources=source_reports))
    return StatusReport(targets=tuple(reports))
