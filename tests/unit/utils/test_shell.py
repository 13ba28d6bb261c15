"""Unit tests for shell execution utilities."""

from unittest.mock import MagicMock, patch

from amu.utils.shell import CommandResult, command_exists, run_command


class TestRunCommand:
    """Tests for run_command function."""

    @patch("amu.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command returns stdout, stderr and the exit code."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=1)

        result = run_command(["stow", "-n"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=1)
        assert not result.success

    @patch("amu.utils.shell.subprocess.run")
    def test_passes_options(self, mock_run: MagicMock) -> None:
        """run_command captures text output with a timeout and never checks."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["stow", "--version"], timeout=5.0)

        kwargs = mock_run.call_args.kwargs
        assert kwargs == {"capture_output": True, "text": True, "timeout": 5.0}


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_success_property(self) -> None:
        """success is True only for exit code 0."""
        assert CommandResult(stdout="", stderr="", returncode=0).success
        assert not CommandResult(stdout="", stderr="", returncode=2).success


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("amu.utils.shell.shutil.which", return_value="/usr/bin/stow")
    def test_found(self, mock_which: MagicMock) -> None:
        """Commands on PATH exist."""
        assert command_exists("stow")
        mock_which.assert_called_once_with("stow")

    @patch("amu.utils.shell.shutil.which", return_value=None)
    def test_missing(self, _mock_which: MagicMock) -> None:
        """Commands not on PATH do not exist."""
        assert not command_exists("stow")
