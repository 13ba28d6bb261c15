"""Fixtures for CLI command tests.

Every CLI test runs with the built-in linker and a registry file inside
the test's temporary directory.
"""

from pathlib import Path

import pytest
from amu.cli.main import app
from amu.core.registry import load_registry
from amu.models.registry import Registry
from amu.utils import formatting
from typer.testing import CliRunner


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Use the built-in linker, a temporary registry and wide consoles."""
    monkeypatch.setenv("AMU_LINKER", "builtin")
    monkeypatch.setenv("AMU_CONFIG", str(tmp_path / "amu" / "config.toml"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setattr(formatting.console, "width", 250)
    monkeypatch.setattr(formatting.err_console, "width", 250)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Location of the registry file used by the CLI."""
    return tmp_path / "amu" / "config.toml"


@pytest.fixture
def read_registry(config_path: Path):
    """Load the registry the CLI wrote."""

    def _read() -> Registry:
        return load_registry(config_path)

    return _read


@pytest.fixture
def registered(source_dir: Path, target_dir: Path) -> tuple[Path, Path]:
    """Source linked into target through the add command."""
    result = CliRunner().invoke(app, ["add", str(source_dir), str(target_dir)])
    assert result.exit_code == 0
    return source_dir, target_dir
