"""Unit tests for update command.

Tests for relinking the registered sources of targets.
"""

import shutil
from pathlib import Path

from amu.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestUpdateCommand:
    """Tests for the update command."""

    def test_update_empty_registry(self) -> None:
        """With nothing registered there is nothing to do."""
        result = runner.invoke(app, ["update", "--all"])

        assert result.exit_code == 0
        assert "No targets registered." in result.stdout

    def test_update_unregistered_target(
        self, registered: tuple[Path, Path], tmp_path: Path
    ) -> None:
        """An unregistered target is reported without failing."""
        result = runner.invoke(app, ["update", str(tmp_path)])

        assert result.exit_code == 0
        assert "Target not registered" in result.stdout

    def test_update_links_new_files(self, registered: tuple[Path, Path]) -> None:
        """Files added to a source are linked on update."""
        source, target = registered
        (source / "new.txt").write_text("new\n")

        result = runner.invoke(app, ["update", str(target)])

        assert result.exit_code == 0
        assert "Updating" in result.stdout
        assert "Restowed:" in result.stdout
        assert (target / "new.txt").is_symlink()

    def test_update_all(self, registered: tuple[Path, Path]) -> None:
        """--all updates every registered target."""
        source, target = registered
        (source / "new.txt").write_text("new\n")

        result = runner.invoke(app, ["update", "--all"])

        assert result.exit_code == 0
        assert (target / "new.txt").is_symlink()

    def test_update_by_source(self, registered: tuple[Path, Path]) -> None:
        """--source selects the targets that use the source."""
        source, target = registered
        (source / "new.txt").write_text("new\n")

        result = runner.invoke(app, ["update", "--source", str(source)])

        assert result.exit_code == 0
        assert (target / "new.txt").is_symlink()

    def test_update_unknown_source(self, registered: tuple[Path, Path], tmp_path: Path) -> None:
        """An unregistered --source is reported without failing."""
        result = runner.invoke(app, ["update", "--source", str(tmp_path)])

        assert result.exit_code == 0
        assert "Source not registered" in result.stdout

    def test_update_skips_missing_source(self, registered: tuple[Path, Path]) -> None:
        """Sources that no longer exist are skipped."""
        source, target = registered
        shutil.rmtree(source)

        result = runner.invoke(app, ["update", str(target)])

        assert result.exit_code == 0
        assert "Skipped (not found):" in result.stdout

    def test_update_failure_exits_1(self, registered: tuple[Path, Path]) -> None:
        """A failing source is counted and fails the command."""
        source, target = registered
        (source / "new.txt").write_text("new\n")
        (target / "new.txt").write_text("local\n")

        result = runner.invoke(app, ["update", str(target)])

        assert result.exit_code == 1
        assert "Failed:" in result.stdout
        assert "1 failed" in result.stdout

    def test_update_dry_run(self, registered: tuple[Path, Path]) -> None:
        """A dry run prints the plan and links nothing."""
        source, target = registered
        (source / "new.txt").write_text("new\n")

        result = runner.invoke(app, ["update", str(target), "--dry-run"])

        assert result.exit_code == 0
        assert "[dry-run]" in result.stdout
        assert not (target / "new.txt").exists()
