"""CLI commands for amu.

This package contains all subcommand implementations.
"""

from amu.cli.commands import add, clear, listing, remove, restore, status, update

__all__ = ["add", "clear", "listing", "remove", "restore", "status", "update"]
