"""Clear command implementation.

Removes the symlinks of every source of the selected targets and drops
the targets from the registry.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from amu.cli.display import print_batch_summary, print_grouped_results
from amu.cli.types import get_context_linker, select_targets, selected_pairs
from amu.core.executor import BatchSummary, execute_pairs
from amu.core.paths import abbreviate_path
from amu.core.registry import commit_registry, require_registry
from amu.linkers.base import LinkMode
from amu.utils.formatting import print_dry_run, print_success


def clear_targets(
    ctx: typer.Context,
    target: Annotated[
        Path | None,
        typer.Argument(help="Target directory (defaults to the current directory)."),
    ] = None,
    all_targets: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Clear all registered targets.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
) -> None:
    """Remove all symlinks of a target and unregister its sources.

    A target stays registered with the sources whose links could not be
    removed, so the command can be retried.

    Examples:
        amu clear ~/.config
        amu clear --all -n                      # Preview clearing everything
    """
    registry = require_registry()
    targets = select_targets(registry, target, all_targets)
    if not targets:
        return

    pairs = selected_pairs(registry, targets)
    results = execute_pairs(get_context_linker(ctx), LinkMode.REMOVE, pairs, dry_run=dry_run)

    if dry_run:
        print_grouped_results(results, heading="Clearing", done="Unlinked")
        for target_path in targets:
            print_dry_run(f"Would unregister all sources of {escape(abbreviate_path(target_path))}")
        summary = BatchSummary.from_results(results)
        if summary.exit_code:
            raise typer.Exit(code=summary.exit_code)
        return

    for target_path in targets:
        target_results = [r for r in results if r.target == target_path]
        if not any(r.failed for r in target_results):
            registry.clear_target(target_path)
            continue
        for result in target_results:
            if not result.failed:
                registry.remove(target_path, result.source)
    commit_registry(registry)

    summary = BatchSummary.from_results(results)
    if summary.failed:
        print_grouped_results(results, heading="Clearing", done="Unlinked")
        print_batch_summary("Clear", summary)
        raise typer.Exit(code=summary.exit_code)

    if all_targets:
        print_success("Cleared all registered sources")
    else:
        for target_path in targets:
            print_success(f"Cleared: {escape(abbreviate_path(target_path))}")
