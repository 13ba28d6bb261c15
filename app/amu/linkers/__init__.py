"""Linkers for planning and applying symlink trees.

This module provides the abstract linker capability and its concrete
implementations (GNU Stow and the built-in linker).
"""

from amu.linkers.base import Linker, LinkMode
from amu.linkers.builtin import BuiltinLinker
from amu.linkers.plan import parse_plan
from amu.linkers.stow import StowLinker

__all__ = ["BuiltinLinker", "LinkMode", "Linker", "StowLinker", "parse_plan"]
