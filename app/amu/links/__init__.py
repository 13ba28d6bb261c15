"""Link-state inspection for registered source/target pairs.

This module provides the tree walker, the status classifier and the
aggregation of statuses into summaries.
"""

from amu.links.models import EntryKind, LinkAction, LinkOperation, WalkEntry
from amu.links.status import SourceStatus, StatusKind, check_source_status
from amu.links.summary import Severity, StatusReport, StatusSummary, build_report
from amu.links.walker import TreeWalker

__all__ = [
    "EntryKind",
    "LinkAction",
    "LinkOperation",
    "Severity",
    "SourceStatus",
    "StatusKind",
    "StatusReport",
    "StatusSummary",
    "TreeWalker",
    "WalkEntry",
    "build_report",
    "check_source_status",
]
