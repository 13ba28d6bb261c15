"""GNU Stow linker implementation.

Creates, removes and refreshes symlink trees by running stow with
``--no-folding``, so every file gets its own link and directories in
the target stay real directories.
"""

import logging
import subprocess
from pathlib import Path

from amu.core.errors import LinkToolError
from amu.linkers.base import Linker, LinkMode, split_source_path
from amu.links.status import has_conflict_marker
from amu.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class StowLinker(Linker):
    """Linker backed by the ``stow`` executable.

    Stow writes its plan to stderr when run with ``-n -v``, so the
    diagnostic channel, not stdout, is the plan transcript.
    """

    _STOW_TIMEOUT: float = 120.0

    _MODE_FLAGS: dict[LinkMode, tuple[str, ...]] = {
        LinkMode.CREATE: (),
        LinkMode.REMOVE: ("-D",),
        LinkMode.REFRESH: ("-R",),
    }

    @property
    def name(self) -> str:
        """Return stow as the linking utility."""
        return "stow"

    def is_available(self) -> bool:
        """Check if stow is available."""
        return command_exists("stow")

    def plan(self, mode: LinkMode, source: Path, target: Path) -> str:
        """Run stow in simulation mode and return its stderr.

        Stow exits non-zero when a simulation finds conflicts, so a failed
        run is only an error when its transcript reports no conflict.

        Raises:
            LinkToolError: If the source path is invalid, stow cannot run,
                or stow fails for a reason other than a conflict.
        """
        args = self._build_args(mode, source, target, simulate=True)
        result = self._run(args)
        if not result.success and not has_conflict_marker(result.stderr):
            diagnostics = result.stderr.strip() or f"stow exited with code {result.returncode}"
            raise LinkToolError(diagnostics)
        return result.stderr

    def apply(self, mode: LinkMode, source: Path, target: Path) -> None:
        """Run stow for real.

        Raises:
            LinkToolError: If stow exits non-zero, carrying its stderr.
        """
        args = self._build_args(mode, source, target, simulate=False)
        result = self._run(args)
        if not result.success:
            diagnostics = result.stderr.strip() or f"stow exited with code {result.returncode}"
            raise LinkToolError(diagnostics)

    def _build_args(
        self,
        mode: LinkMode,
        source: Path,
        target: Path,
        *,
        simulate: bool,
    ) -> list[str]:
        """Build the stow command line for an operation.

        Args:
            mode: Operation to run.
            source: Source directory (the stow "package").
            target: Target directory.
            simulate: If True, add ``-n -v`` so nothing is modified.

        Returns:
            Command and arguments.
        """
        parent, package = split_source_path(source)

        args = ["stow"]
        if simulate:
            args.extend(["-n", "-v"])
        args.append("--no-folding")
        args.extend(self._MODE_FLAGS[mode])
        args.extend(["-t", str(target), "-d", str(parent), package])
        return args

    def _run(self, args: list[str]) -> CommandResult:
        """Execute stow, converting launch failures into LinkToolError."""
        logger.info("Executing: %s", " ".join(args))
        try:
            return run_command(args, timeout=self._STOW_TIMEOUT)
        except subprocess.TimeoutExpired as e:
            msg = f"stow timed out after {self._STOW_TIMEOUT:.0f}s"
            raise LinkToolError(msg) from e
        except OSError as e:
            raise LinkToolError(str(e)) from e
