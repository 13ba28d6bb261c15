"""Add command implementation.

Registers a source directory for a target and links it in.
"""

from pathlib import Path
from typing import Annotated

import typer

from amu.cli.display import print_plan
from amu.cli.types import get_context_linker
from amu.core.errors import AmuError
from amu.core.executor import execute_link
from amu.core.paths import abbreviate_path, normalize_source, resolve_target
from amu.core.registry import commit_registry, require_registry
from amu.linkers.base import LinkMode
from amu.utils.formatting import print_error, print_success


def add_source(
    ctx: typer.Context,
    source: Annotated[
        Path,
        typer.Argument(help="Source directory to merge into the target."),
    ],
    target: Annotated[
        Path | None,
        typer.Argument(help="Target directory (defaults to the current directory)."),
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
    """Register a source directory and create its symlinks.

    Every file of SOURCE gets its own symlink at the same relative path
    under TARGET. Directories in the target stay real directories, so
    several sources can be merged into one target.

    Examples:
        amu add ~/dotfiles/config ~/.config     # Merge into ~/.config
        amu add ~/work/config -n                # Preview linking into cwd
    """
    try:
        source_path = normalize_source(source)
        target_path = resolve_target(target)
    except AmuError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not source_path.is_dir():
        print_error(f"Source is not a directory: {source_path}")
        raise typer.Exit(code=1)
    if not target_path.is_dir():
        print_error(f"Target is not a directory: {target_path}")
        raise typer.Exit(code=1)

    registry = require_registry()
    try:
        registry.add(target_path, source_path)
    except AmuError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    linker = get_context_linker(ctx)

    if dry_run:
        result = execute_link(linker, LinkMode.CREATE, source_path, target_path, dry_run=True)
        print_plan(result)
        if result.failed:
            raise typer.Exit(code=1)
        return

    try:
        linker.apply_create(source_path, target_path)
    except AmuError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    commit_registry(registry)
    print_success(f"Added: {abbreviate_path(source_path)} -> {abbreviate_path(target_path)}")
