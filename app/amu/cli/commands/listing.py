"""List command implementation.

Shows the registered sources of each target.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from amu.cli.types import select_targets
from amu.core.paths import abbreviate_path
from amu.core.registry import require_registry
from amu.links.walker import TreeWalker
from amu.utils.formatting import console


def list_targets(
    target: Annotated[
        Path | None,
        typer.Argument(help="Target directory (defaults to all registered targets)."),
    ] = None,
    all_targets: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="List all registered targets.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Also show the symlinks each source provides.",
        ),
    ] = False,
) -> None:
    """List registered sources.

    Without a target, every registered target is listed.

    Examples:
        amu list
        amu list ~/.config --verbose
    """
    registry = require_registry()
    targets = select_targets(registry, target, all_targets or target is None)

    for target_path in targets:
        console.print(f"[target]{escape(abbreviate_path(target_path))}:[/]")
        sources = registry.sources_of(target_path) or []
        if verbose:
            _print_verbose(target_path, sources)
        else:
            for source in sources:
                console.print(f"  - {escape(abbreviate_path(source))}")
        console.print()


def _print_verbose(target: Path, sources: list[Path]) -> None:
    """Print the sources section followed by the links section."""
    console.print("  [header]sources:[/]")
    for source in sources:
        missing = "" if source.is_dir() else " [error](not found)[/]"
        console.print(f"    - {escape(abbreviate_path(source))}{missing}")

    console.print("  [header]links:[/]")
    count = 0
    for source in sources:
        for relative, destination in TreeWalker(source, target).links():
            console.print(
                f"    [linked]{escape(relative)}[/] [muted]->[/] "
                f"{escape(abbreviate_path(destination))}"
            )
            count += 1
    if count == 0:
        console.print("    [muted](none)[/]")
