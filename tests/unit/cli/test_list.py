"""Unit tests for list command."""

import shutil
from pathlib import Path

from amu.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestListCommand:
    """Tests for the list command."""

    def test_list_empty(self) -> None:
        """An empty registry is reported."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No targets registered." in result.stdout

    def test_list_all_targets(self, registered: tuple[Path, Path]) -> None:
        """Without a target every registered target is listed."""
        source, target = registered

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert str(target.resolve()) in result.stdout
        assert f"- {source.resolve()}" in result.stdout

    def test_list_unregistered_target(self, registered: tuple[Path, Path], tmp_path: Path) -> None:
        """An unregistered target is reported."""
        result = runner.invoke(app, ["list", str(tmp_path)])

        assert result.exit_code == 0
        assert "Target not registered" in result.stdout

    def test_list_verbose_shows_links(self, registered: tuple[Path, Path]) -> None:
        """--verbose lists the sources and their links."""
        _, target = registered

        result = runner.invoke(app, ["list", str(target), "--verbose"])

        assert result.exit_code == 0
        assert "sources:" in result.stdout
        assert "links:" in result.stdout
        assert "a.txt" in result.stdout
        assert "nvim/init.lua" in result.stdout

    def test_list_verbose_missing_source(self, registered: tuple[Path, Path]) -> None:
        """A missing source is marked and has no links."""
        source, target = registered
        shutil.rmtree(source)

        result = runner.invoke(app, ["list", str(target), "-v"])

        assert result.exit_code == 0
        assert "(not found)" in result.stdout
        assert "(none)" in result.stdout
