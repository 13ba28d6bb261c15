"""Subprocess helpers for the external linking utility."""

import logging
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error; stow writes its plan and diagnostics here.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a command to completion and capture its output as text.

    A non-zero exit is not an error here; callers decide from the result.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        OSError: If the executable cannot be started.
    """
    completed = subprocess.run(args, capture_output=True, text=True, timeout=timeout)
    logger.debug("%s exited with code %d", args[0], completed.returncode)
    return CommandResult(
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH."""
    return shutil.which(name) is not None
