"""Remove command implementation.

Removes the symlinks of a source and unregisters it from a target.
"""

from pathlib import Path
from typing import Annotated

import typer

from amu.cli.display import print_plan
from amu.cli.types import get_context_linker
from amu.core.errors import AmuError, NotRegisteredError
from amu.core.executor import execute_link
from amu.core.paths import abbreviate_path, lookup_source, lookup_target
from amu.core.registry import commit_registry, require_registry
from amu.linkers.base import LinkMode
from amu.utils.formatting import print_dry_run, print_error, print_success


def remove_source(
    ctx: typer.Context,
    source: Annotated[
        Path,
        typer.Argument(help="Registered source directory to remove."),
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
    """Remove the symlinks of a source and unregister it.

    If the source directory no longer exists, only the registration is
    removed.

    Examples:
        amu remove ~/work/config ~/.config
        amu remove ~/work/config -n             # Preview unlinking from cwd
    """
    source_path = lookup_source(source)
    target_path = lookup_target(target)

    registry = require_registry()
    if source_path not in (registry.sources_of(target_path) or []):
        print_error(str(NotRegisteredError(source_path, target_path)))
        raise typer.Exit(code=1)

    linker = get_context_linker(ctx)
    can_unlink = source_path.is_dir() and target_path.is_dir()

    if dry_run:
        if can_unlink:
            result = execute_link(linker, LinkMode.REMOVE, source_path, target_path, dry_run=True)
            print_plan(result)
        print_dry_run(
            f"Would unregister {abbreviate_path(source_path)} -> {abbreviate_path(target_path)}"
        )
        return

    try:
        if can_unlink:
            linker.apply_remove(source_path, target_path)
        registry.remove(target_path, source_path)
    except AmuError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    commit_registry(registry)
    print_success(f"Removed: {abbreviate_path(source_path)} -> {abbreviate_path(target_path)}")
