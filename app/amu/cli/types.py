"""Shared types and utilities for CLI commands.

This module provides the target selection and linker lookup used by
every command that works on registered targets.
"""

from pathlib import Path

import typer

from amu.core.executor import get_available_linker
from amu.core.paths import abbreviate_path, lookup_target
from amu.linkers.base import Linker
from amu.models.registry import Registry
from amu.utils.formatting import print_info


def get_context_linker(ctx: typer.Context) -> Linker:
    """Get the linker chosen at startup.

    Falls back to the configured linker when a command is invoked
    without the main callback (e.g. from tests).
    """
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and obj.get("linker") is not None:
        return obj["linker"]
    return get_available_linker()


def select_targets(
    registry: Registry,
    target: Path | None,
    all_targets: bool = False,
) -> list[Path]:
    """Select the registered targets a batch command works on.

    ``--all`` wins over a positional target; no target means the current
    directory. Prints an informational line and returns an empty list
    when there is nothing to do.

    Args:
        registry: Loaded registry.
        target: User-supplied target, or None.
        all_targets: Whether --all was given.

    Returns:
        Registered targets in sorted order.
    """
    if registry.is_empty:
        print_info("No targets registered.")
        return []

    if all_targets:
        return registry.target_paths()

    resolved = lookup_target(target)
    if registry.sources_of(resolved) is None:
        print_info(f"Target not registered: {abbreviate_path(resolved)}")
        return []
    return [resolved]


def selected_pairs(registry: Registry, targets: list[Path]) -> list[tuple[Path, Path]]:
    """Expand targets into (target, source) pairs in registry order."""
    return [(target, source) for target in targets for source in registry.sources_of(target) or []]
