"""Status command implementation.

Classifies every registered source of the selected targets and reports
divergences from the expected symlink state.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from amu.cli.display import print_status_report
from amu.cli.types import get_context_linker, select_targets
from amu.core.registry import require_registry
from amu.links.summary import build_report
from amu.utils.formatting import console


def show_status(
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
            help="Check all registered targets.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output in JSON format.",
        ),
    ] = False,
) -> None:
    """Check the symlink state of registered sources.

    Reports broken links, real files in place of links, conflicts and
    missing directories. Exits with code 1 if any source has a warning
    or an error.

    Examples:
        amu status                              # Target = current directory
        amu status --all --json                 # Machine-readable report
    """
    registry = require_registry()
    targets = select_targets(registry, target, all_targets)
    if not targets:
        return

    selection = [(t, registry.sources_of(t) or []) for t in targets]
    report = build_report(selection, get_context_linker(ctx))

    if json_output:
        console.print_json(json.dumps(report.to_dict()))
    else:
        print_status_report(report)

    exit_code = report.summary.exit_code
    if exit_code:
        raise typer.Exit(code=exit_code)
