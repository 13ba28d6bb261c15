"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from amu.linkers.builtin import BuiltinLinker


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Source tree with one top-level file and one nested file."""
    source = tmp_path / "dotfiles" / "config"
    (source / "nvim").mkdir(parents=True)
    (source / "a.txt").write_text("a\n")
    (source / "nvim" / "init.lua").write_text("-- init\n")
    return source


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Empty target directory."""
    target = tmp_path / "home" / ".config"
    target.mkdir(parents=True)
    return target


@pytest.fixture
def linker() -> BuiltinLinker:
    """Deterministic in-process linker."""
    return BuiltinLinker()


@pytest.fixture
def mock_stow_plan() -> str:
    """Sample stow -n -v output for a partially linked source."""
    return """LINK: a.txt => ../../dotfiles/config/a.txt
UNLINK: old.txt
--- Skipping nvim/init.lua as it already points to ../../dotfiles/config/nvim/init.lua
WARNING: in simulation mode so not modifying filesystem."""


@pytest.fixture
def mock_stow_conflict() -> str:
    """Sample stow -n -v output when a real file blocks a link."""
    return """WARNING! stowing config would cause conflicts:
  * existing target is neither a link nor a directory: a.txt
All operations aborted."""
