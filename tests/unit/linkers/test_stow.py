"""Unit tests for StowLinker.

Tests for the GNU Stow linker implementation.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from amu.core.errors import LinkToolError, LinkToolNotFoundError
from amu.linkers.base import LinkMode
from amu.linkers.stow import StowLinker
from amu.links.models import LinkAction
from amu.utils.shell import CommandResult

SOURCE = Path("/home/me/dotfiles/config")
TARGET = Path("/home/me/.config")


class TestStowLinker:
    """Tests for StowLinker class."""

    @pytest.fixture
    def linker(self) -> StowLinker:
        """Create StowLinker instance."""
        return StowLinker()

    def test_name(self, linker: StowLinker) -> None:
        """Linker is named after the utility."""
        assert linker.name == "stow"

    def test_is_available_when_stow_exists(self, linker: StowLinker) -> None:
        """is_available returns True when stow exists."""
        with patch("amu.linkers.stow.command_exists", return_value=True):
            assert linker.is_available() is True

    def test_ensure_available_raises_when_missing(self, linker: StowLinker) -> None:
        """ensure_available raises with install hints."""
        with (
            patch("amu.linkers.stow.command_exists", return_value=False),
            pytest.raises(LinkToolNotFoundError, match="brew install stow"),
        ):
            linker.ensure_available()

    @pytest.mark.parametrize(
        ("mode", "flags"),
        [
            (LinkMode.CREATE, []),
            (LinkMode.REMOVE, ["-D"]),
            (LinkMode.REFRESH, ["-R"]),
        ],
    )
    def test_apply_arguments(self, linker: StowLinker, mode: LinkMode, flags: list[str]) -> None:
        """apply runs stow non-folding with target, parent and leaf name."""
        with patch("amu.linkers.stow.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

            linker.apply(mode, SOURCE, TARGET)

        args = mock_run.call_args.args[0]
        assert args == [
            "stow",
            "--no-folding",
            *flags,
            "-t",
            "/home/me/.config",
            "-d",
            "/home/me/dotfiles",
            "config",
        ]

    def test_plan_returns_stderr(self, linker: StowLinker, mock_stow_plan: str) -> None:
        """plan simulates with -n -v and returns the diagnostic channel."""
        with patch("amu.linkers.stow.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr=mock_stow_plan, returncode=0)

            transcript = linker.plan_create(SOURCE, TARGET)

        assert transcript == mock_stow_plan
        args = mock_run.call_args.args[0]
        assert args[:4] == ["stow", "-n", "-v", "--no-folding"]

    def test_plan_returns_conflicts_despite_exit_status(
        self, linker: StowLinker, mock_stow_conflict: str
    ) -> None:
        """A conflicting simulation exits non-zero but still returns the plan."""
        with patch("amu.linkers.stow.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="", stderr=mock_stow_conflict, returncode=1
            )

            assert linker.plan_refresh(SOURCE, TARGET) == mock_stow_conflict

    def test_plan_failure_without_conflict_raises(self, linker: StowLinker) -> None:
        """A simulation failing for another reason raises with stow's message."""
        with patch("amu.linkers.stow.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="", stderr="stow: ERROR: The stow directory does not exist\n", returncode=2
            )

            with pytest.raises(LinkToolError, match="stow directory does not exist"):
                linker.plan_create(SOURCE, TARGET)

    def test_simulate_parses_plan(self, linker: StowLinker, mock_stow_plan: str) -> None:
        """simulate returns the parsed operations of the plan."""
        with patch("amu.linkers.stow.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr=mock_stow_plan, returncode=0)

            operations = linker.simulate(LinkMode.CREATE, SOURCE, TARGET)

        assert [op.action for op in operations] == [
            LinkAction.LINK,
            LinkAction.UNLINK,
            LinkAction.SKIP,
        ]

    def test_apply_failure_raises_with_stderr(
        self, linker: StowLinker, mock_stow_conflict: str
    ) -> None:
        """A non-zero exit raises LinkToolError carrying stderr."""
        with patch("amu.linkers.stow.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="", stderr=mock_stow_conflict, returncode=1
            )

            with pytest.raises(LinkToolError) as exc_info:
                linker.apply_create(SOURCE, TARGET)

        assert "existing target" in exc_info.value.diagnostics

    def test_apply_failure_without_stderr(self, linker: StowLinker) -> None:
        """A silent failure still reports the exit code."""
        with patch("amu.linkers.stow.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=2)

            with pytest.raises(LinkToolError, match="exited with code 2"):
                linker.apply_remove(SOURCE, TARGET)

    def test_timeout_raises_link_tool_error(self, linker: StowLinker) -> None:
        """A hanging stow is reported as a LinkToolError."""
        with (
            patch(
                "amu.linkers.stow.run_command",
                side_effect=subprocess.TimeoutExpired(cmd="stow", timeout=120),
            ),
            pytest.raises(LinkToolError, match="timed out"),
        ):
            linker.apply_create(SOURCE, TARGET)

    def test_missing_executable_raises_link_tool_error(self, linker: StowLinker) -> None:
        """A vanished executable is reported as a LinkToolError."""
        with (
            patch("amu.linkers.stow.run_command", side_effect=FileNotFoundError("stow")),
            pytest.raises(LinkToolError),
        ):
            linker.plan_create(SOURCE, TARGET)

    def test_root_source_rejected(self, linker: StowLinker) -> None:
        """A source without a leaf name cannot be stowed."""
        with (
            patch("amu.linkers.stow.run_command") as mock_run,
            pytest.raises(LinkToolError, match="no directory name"),
        ):
            linker.apply_create(Path("/"), TARGET)

        mock_run.assert_not_called()
