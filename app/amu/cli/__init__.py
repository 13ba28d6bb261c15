"""CLI package for amu.

This package contains the Typer application and all subcommands.
"""

from amu.cli.main import app

__all__ = ["app"]
