"""Update command implementation.

Relinks every registered source of the selected targets, picking up
files that were added to or removed from the sources.
"""

from pathlib import Path
from typing import Annotated

import typer

from amu.cli.display import print_batch_summary, print_grouped_results
from amu.cli.types import get_context_linker, select_targets, selected_pairs
from amu.core.executor import BatchSummary, execute_pairs
from amu.core.paths import abbreviate_path, lookup_source
from amu.core.registry import require_registry
from amu.linkers.base import LinkMode
from amu.utils.formatting import print_info


def update_targets(
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
            help="Update all registered targets.",
        ),
    ] = False,
    source: Annotated[
        Path | None,
        typer.Option(
            "--source",
            "-s",
            help="Only update targets that reference this source.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
) -> None:
    """Reapply the registered sources of a target.

    Sources that no longer exist are skipped. A failure on one source
    does not stop the others; the command exits with code 1 if any
    source failed.

    Examples:
        amu update                              # Target = current directory
        amu update --all                        # Every registered target
        amu update --source ~/dotfiles/config   # Targets using this source
    """
    registry = require_registry()

    source_path = lookup_source(source) if source is not None else None
    # --source without a target searches every registered target
    if source_path is not None and target is None:
        all_targets = True

    targets = select_targets(registry, target, all_targets)
    if not targets:
        return

    pairs = selected_pairs(registry, targets)
    if source_path is not None:
        pairs = [(t, s) for t, s in pairs if s == source_path]
        if not pairs:
            print_info(f"Source not registered: {abbreviate_path(source_path)}")
            return

    results = execute_pairs(get_context_linker(ctx), LinkMode.REFRESH, pairs, dry_run=dry_run)
    print_grouped_results(results, heading="Updating", done="Restowed")

    summary = BatchSummary.from_results(results)
    print_batch_summary("Update", summary)
    if summary.exit_code:
        raise typer.Exit(code=summary.exit_code)
