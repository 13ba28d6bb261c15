"""Path management for amu.

This module provides the XDG-compliant location of the registry file
and the helpers that turn user-supplied paths into the canonical form
stored in the registry.

XDG defaults:
- Config: ~/.config/amu/
"""

import os
from pathlib import Path

from amu.core.errors import SourceNotFoundError, TargetNotFoundError

# Application identifier for directory naming
APP_NAME = "amu"

# Environment variable that overrides the registry file location
CONFIG_ENV_VAR = "AMU_CONFIG"

CONFIG_FILENAME = "config.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/amu/ (or XDG_CONFIG_HOME/amu/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the registry file path.

    The AMU_CONFIG environment variable takes precedence over the
    XDG location.

    Returns:
        Path to the registry file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_config_dir() / CONFIG_FILENAME


def expand_path(path: Path | str) -> Path:
    """Expand a leading ``~`` without touching the filesystem."""
    return Path(path).expanduser()


def normalize_source(path: Path | str) -> Path:
    """Expand and resolve a source path.

    Args:
        path: User-supplied source path.

    Returns:
        Absolute, symlink-resolved path.

    Raises:
        SourceNotFoundError: If the path does not exist.
    """
    expanded = expand_path(path)
    try:
        return expanded.resolve(strict=True)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise SourceNotFoundError(expanded) from e


def resolve_target(path: Path | str | None) -> Path:
    """Expand and resolve a target path, defaulting to the current directory.

    Args:
        path: User-supplied target path, or None for the working directory.

    Returns:
        Absolute, symlink-resolved path.

    Raises:
        TargetNotFoundError: If the path does not exist.
    """
    if path is None:
        return Path.cwd().resolve()
    expanded = expand_path(path)
    try:
        return expanded.resolve(strict=True)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise TargetNotFoundError(expanded) from e


def abbreviate_path(path: Path) -> str:
    """Format a path with ``~`` for locations under the home directory.

    Args:
        path: Path to format.

    Returns:
        Tilde-prefixed path string for home paths, absolute string otherwise.
    """
    try:
        relative = path.relative_to(Path.home())
    except ValueError:
        return str(path)
    if relative == Path():
        return "~"
    return f"~/{relative}"


def lookup_target(path: Path | str | None) -> Path:
    """Resolve a target for a registry lookup.

    Unlike resolve_target(), a target that no longer exists is not an
    error: it is made absolute lexically so it can still be matched
    against the registry.

    Args:
        path: User-supplied target path, or None for the working directory.

    Returns:
        Absolute path.
    """
    try:
        return resolve_target(path)
    except TargetNotFoundError as e:
        return Path(os.path.abspath(e.path))


def lookup_source(path: Path | str) -> Path:
    """Resolve a source for a registry lookup.

    A source that no longer exists is made absolute lexically, so a
    deleted source can still be unregistered.
    """
    try:
        return normalize_source(path)
    except SourceNotFoundError as e:
        return Path(os.path.abspath(e.path))
