"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from amu import __version__
from amu.cli.commands import add, clear, listing, remove, restore, status, update
from amu.core.errors import AmuError
from amu.core.executor import get_available_linker
from amu.utils.formatting import err_console, print_error

# Create main Typer app
app = typer.Typer(
    name="amu",
    help="Merge multiple source directories into one target with symlinks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"amu version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: If True, log at DEBUG.
        quiet: If True, log errors only. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """amu - Merge multiple source directories into one target with symlinks.

    Register source directories for a target directory and keep the
    target's symlinks in sync with the registered sources.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    # The linking utility is checked once, before any command runs
    try:
        ctx.obj["linker"] = get_available_linker()
    except (AmuError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


# Register commands
app.command("add")(add.add_source)
app.command("remove")(remove.remove_source)
app.command("update")(update.update_targets)
app.command("restore")(restore.restore_targets)
app.command("list")(listing.list_targets)
app.command("status")(status.show_status)
app.command("clear")(clear.clear_targets)


if __name__ == "__main__":
    app()
