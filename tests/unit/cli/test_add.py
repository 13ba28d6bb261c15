"""Unit tests for add command.

Tests for registering a source and linking it into a target.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from amu.cli.main import app
from amu.models.registry import Registry
from typer.testing import CliRunner

runner = CliRunner()


class TestAddCommand:
    """Tests for the add command."""

    def test_add_links_and_registers(
        self,
        source_dir: Path,
        target_dir: Path,
        config_path: Path,
        read_registry: Callable[[], Registry],
    ) -> None:
        """add creates the links and saves the registration."""
        result = runner.invoke(app, ["add", str(source_dir), str(target_dir)])

        assert result.exit_code == 0
        assert "Added:" in result.stdout
        assert (target_dir / "a.txt").is_symlink()
        assert (target_dir / "nvim" / "init.lua").is_symlink()
        assert config_path.exists()
        assert read_registry().sources_of(target_dir.resolve()) == [source_dir.resolve()]

    def test_add_defaults_to_current_directory(
        self,
        source_dir: Path,
        target_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        read_registry: Callable[[], Registry],
    ) -> None:
        """Without a target the current directory is used."""
        monkeypatch.chdir(target_dir)

        result = runner.invoke(app, ["add", str(source_dir)])

        assert result.exit_code == 0
        assert read_registry().sources_of(target_dir.resolve()) == [source_dir.resolve()]

    def test_add_duplicate_fails(self, source_dir: Path, target_dir: Path) -> None:
        """Registering the same pair twice is an error."""
        runner.invoke(app, ["add", str(source_dir), str(target_dir)])

        result = runner.invoke(app, ["add", str(source_dir), str(target_dir)])

        assert result.exit_code == 1
        assert "Already registered" in result.stderr

    def test_add_missing_source_fails(self, tmp_path: Path, target_dir: Path) -> None:
        """A missing source is reported."""
        result = runner.invoke(app, ["add", str(tmp_path / "missing"), str(target_dir)])

        assert result.exit_code == 1
        assert "Source directory does not exist" in result.stderr

    def test_add_missing_target_fails(self, source_dir: Path, tmp_path: Path) -> None:
        """A missing target is reported."""
        result = runner.invoke(app, ["add", str(source_dir), str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Target directory does not exist" in result.stderr

    def test_add_conflict_is_not_registered(
        self, source_dir: Path, target_dir: Path, config_path: Path
    ) -> None:
        """A failed link aborts without saving the registration."""
        (target_dir / "a.txt").write_text("local\n")

        result = runner.invoke(app, ["add", str(source_dir), str(target_dir)])

        assert result.exit_code == 1
        assert "existing target" in result.stderr
        assert not config_path.exists()

    def test_add_dry_run(self, source_dir: Path, target_dir: Path, config_path: Path) -> None:
        """A dry run shows the plan and changes nothing."""
        result = runner.invoke(app, ["add", str(source_dir), str(target_dir), "--dry-run"])

        assert result.exit_code == 0
        assert "[dry-run]" in result.stdout
        assert "a.txt" in result.stdout
        assert list(target_dir.iterdir()) == []
        assert not config_path.exists()
