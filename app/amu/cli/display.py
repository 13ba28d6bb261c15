"""Shared Rich display functions for statuses, plans and results.

Provides the status report renderer and the table builders used by the
commands that link, unlink or relink sources.
"""

from rich.markup import escape
from rich.table import Table

from amu.core.executor import BatchSummary, LinkResult
from amu.core.paths import abbreviate_path
from amu.links.models import LinkAction, LinkOperation
from amu.links.status import CONFLICT_DISPLAY_LINES
from amu.links.summary import Severity, SourceReport, StatusReport, StatusSummary
from amu.utils.formatting import console, print_dry_run

# Glyph and style per severity
_SEVERITY_GLYPHS: dict[Severity, tuple[str, str]] = {
    Severity.OK: ("✓", "success"),
    Severity.WARNING: ("!", "warning"),
    Severity.ERROR: ("✗", "error"),
}

_ACTION_STYLES: dict[LinkAction, tuple[str, str]] = {
    LinkAction.LINK: ("+link", "linked"),
    LinkAction.UNLINK: ("-unlink", "unlinked"),
    LinkAction.SKIP: ("=skip", "skipped"),
    LinkAction.CONFLICT: ("!conflict", "error"),
}


def print_status_report(report: StatusReport) -> None:
    """Print one glyph line per source, grouped by target, and a summary line.

    Args:
        report: Classified statuses of the selected pairs.
    """
    for target_report in report.targets:
        console.print(f"[target]{escape(abbreviate_path(target_report.target))}:[/]")
        for source_report in target_report.sources:
            _print_source_report(source_report)
        console.print()

    console.print(format_summary(report.summary))


def _print_source_report(report: SourceReport) -> None:
    """Print the glyph line of a source and its detail lines."""
    glyph, style = _SEVERITY_GLYPHS[report.severity]
    source = escape(abbreviate_path(report.source))
    console.print(f"  [{style}]{glyph}[/] {source} [muted]({report.status.label})[/]")

    for path in report.status.paths:
        console.print(f"    - {escape(path)}")
    for line in report.status.diagnostic_lines():
        console.print(f"    [muted]{escape(line)}[/]")


def format_summary(summary: StatusSummary) -> str:
    """Format the severity counters as a single line."""
    warnings = "warning" if summary.warning == 1 else "warnings"
    errors = "error" if summary.error == 1 else "errors"
    return (
        f"Summary: [success]{summary.ok} OK[/], "
        f"[warning]{summary.warning} {warnings}[/], "
        f"[error]{summary.error} {errors}[/]"
    )


def create_plan_table(operations: tuple[LinkOperation, ...] | list[LinkOperation]) -> Table:
    """Create a Rich table displaying planned link operations.

    Args:
        operations: Parsed operations in plan order.

    Returns:
        Rich Table configured for operation display.
    """
    table = Table(
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Action", width=9)
    table.add_column("Path", no_wrap=True)
    table.add_column("Detail")

    for operation in operations:
        label, style = _ACTION_STYLES[operation.action]
        table.add_row(
            f"[{style}]{label}[/]",
            escape(operation.path),
            f"[muted]{escape(operation.detail or '')}[/]",
        )

    return table


def print_plan(result: LinkResult) -> None:
    """Print the operations a dry run would perform for one pair.

    Args:
        result: Result of a simulated operation.
    """
    source = escape(abbreviate_path(result.source))
    target = escape(abbreviate_path(result.target))
    print_dry_run(f"Would {result.mode.value} {source} -> {target}")

    if result.operations:
        console.print(create_plan_table(result.operations))
    elif result.failed:
        console.print("  [error]Failed:[/]")
        _print_error_lines(result.error)
    else:
        print_dry_run("Nothing to do")


def print_result_line(result: LinkResult, done: str) -> None:
    """Print the outcome line for one pair of a batch run.

    Args:
        result: Outcome of the operation.
        done: Verb shown for successful operations (e.g. "Restowed").
    """
    source = escape(abbreviate_path(result.source))
    if result.skipped:
        console.print(f"  [skipped]Skipped (not found):[/] {source}")
    elif result.dry_run:
        print_plan(result)
    elif result.success:
        console.print(f"  [success]{done}:[/] {source}")
    else:
        console.print(f"  [error]Failed:[/] {source}")
        _print_error_lines(result.error)


def _print_error_lines(error: str | None) -> None:
    """Print the first non-blank lines of a failure's diagnostics."""
    lines = [line.strip() for line in (error or "").splitlines() if line.strip()]
    for line in lines[:CONFLICT_DISPLAY_LINES]:
        console.print(f"    [muted]{escape(line)}[/]")


def print_batch_summary(label: str, summary: BatchSummary) -> None:
    """Print the closing line of a batch command.

    Args:
        label: Command label (e.g. "Restore").
        summary: Counters of the batch run.
    """
    line = f"{label} complete: {summary.succeeded} succeeded, {summary.failed} failed"
    if summary.skipped:
        line += f", {summary.skipped} skipped"
    style = "error" if summary.failed else "success"
    console.print(f"[{style}]{line}[/]")


def print_grouped_results(results: list[LinkResult], heading: str, done: str) -> None:
    """Print results under one heading line per target.

    Args:
        results: Results in registry order.
        heading: Verb of the heading line (e.g. "Updating").
        done: Verb shown for successful operations.
    """
    current = None
    for result in results:
        if result.target != current:
            if current is not None:
                console.print()
            console.print(f"{heading} [target]{escape(abbreviate_path(result.target))}[/]:")
            current = result.target
        print_result_line(result, done)
