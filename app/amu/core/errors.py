"""Exception hierarchy for amu.

Every error a command can report to the user derives from AmuError, so
the CLI layer can translate them into a single error line and exit code.
"""

from pathlib import Path


class AmuError(Exception):
    """Base exception for amu errors."""


class LinkToolNotFoundError(AmuError):
    """Raised when the external linking utility is not installed."""

    def __init__(self, tool: str = "stow") -> None:
        self.tool = tool
        super().__init__(
            f"{tool} is not installed\n\n"
            "Install with:\n"
            "  macOS:  brew install stow\n"
            "  Ubuntu: sudo apt install stow\n"
            "  Arch:   sudo pacman -S stow\n\n"
            "Or set AMU_LINKER=builtin to use the built-in linker."
        )


class LinkToolError(AmuError):
    """Raised when the linking utility fails or is invoked incorrectly.

    Attributes:
        diagnostics: Text the utility wrote to its diagnostic channel.
    """

    def __init__(self, diagnostics: str) -> None:
        self.diagnostics = diagnostics
        super().__init__(f"link command failed: {diagnostics.strip()}")


class SourceNotFoundError(AmuError):
    """Raised when a source directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source directory does not exist: {path}")


class TargetNotFoundError(AmuError):
    """Raised when a target directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Target directory does not exist: {path}")


class AlreadyRegisteredError(AmuError):
    """Raised when a source is already registered for a target."""

    def __init__(self, source: Path, target: Path) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Already registered: {source} -> {target}")


class NotRegisteredError(AmuError):
    """Raised when a source is not registered for a target."""

    def __init__(self, source: Path, target: Path) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Not registered: {source} -> {target}")


class ConfigParseError(AmuError):
    """Raised when the registry file cannot be parsed or validated."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to parse config file: {message}")


class ConfigSaveError(AmuError):
    """Raised when the registry file cannot be written."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to save config file: {message}")
