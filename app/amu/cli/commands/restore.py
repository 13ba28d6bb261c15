"""Restore command implementation.

Recreates the symlinks of every registered source, e.g. on a fresh
machine after the registry file and the sources were copied over.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from amu.cli.display import print_batch_summary, print_grouped_results
from amu.cli.types import get_context_linker, select_targets, selected_pairs
from amu.core.executor import BatchSummary, execute_pairs
from amu.core.paths import abbreviate_path
from amu.core.registry import require_registry
from amu.linkers.base import LinkMode
from amu.utils.formatting import print_dry_run, print_warning


def restore_targets(
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
            help="Restore all registered targets.",
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
    """Create the symlinks of every registered source.

    Missing target directories are created first. A failure on one
    source does not stop the others; the command exits with code 1 if
    any source failed.

    Examples:
        amu restore --all                       # Fresh machine setup
        amu restore ~/.config -n                # Preview a single target
    """
    registry = require_registry()
    targets = select_targets(registry, target, all_targets)
    if not targets:
        return

    for target_path in targets:
        if target_path.is_dir():
            continue
        if dry_run:
            print_dry_run(f"Would create directory {escape(abbreviate_path(target_path))}")
            continue
        try:
            target_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print_warning(f"Cannot create target directory {target_path}: {e}")

    pairs = selected_pairs(registry, targets)
    results = execute_pairs(get_context_linker(ctx), LinkMode.CREATE, pairs, dry_run=dry_run)
    print_grouped_results(results, heading="Restoring", done="Restored")

    summary = BatchSummary.from_results(results)
    print_batch_summary("Restore", summary)
    if summary.exit_code:
        raise typer.Exit(code=summary.exit_code)
