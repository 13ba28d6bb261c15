"""Registry file I/O operations.

This module provides functions for loading and saving the registry
file in TOML format with validation using the Pydantic Registry model.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from amu.core.errors import ConfigParseError, ConfigSaveError
from amu.core.paths import get_config_path
from amu.models.registry import Registry

logger = logging.getLogger(__name__)


def load_registry(path: Path | None = None) -> Registry:
    """Load and validate the registry from a TOML file.

    A missing file is not an error: it yields an empty registry.

    Args:
        path: Path to the registry file. If None, uses the default location.

    Returns:
        Validated Registry object.

    Raises:
        ConfigParseError: If the file cannot be read, parsed or validated.
    """
    registry_path = path or get_config_path()

    if not registry_path.exists():
        logger.debug("No registry at %s, starting empty", registry_path)
        return Registry()

    try:
        with open(registry_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigParseError(str(e)) from e

    try:
        return Registry.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"Invalid registry content: {e}") from e


def save_registry(registry: Registry, path: Path | None = None) -> Path:
    """Save the registry to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        registry: The Registry object to save.
        path: Path to save the registry. If None, uses the default location.

    Returns:
        Path where the registry was saved.

    Raises:
        ConfigSaveError: If the file cannot be written.
    """
    registry_path = path or get_config_path()
    data = _registry_to_dict(registry)

    tmp_path: Path | None = None
    try:
        registry_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=registry_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(registry_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigSaveError(str(e)) from e

    logger.debug("Saved registry with %d target(s) to %s", len(registry.targets), registry_path)
    return registry_path


def _registry_to_dict(registry: Registry) -> dict[str, Any]:
    """Convert a Registry to a dictionary suitable for TOML serialization.

    Targets are written in sorted order, sources in registration order.
    """
    return {
        "targets": {
            str(target): [str(source) for source in registry.targets[target]]
            for target in registry.target_paths()
        }
    }


def require_registry(path: Path | None = None) -> Registry:
    """Load the registry or exit with an error message.

    This is a convenience wrapper around load_registry() for CLI commands.

    Args:
        path: Optional custom registry path.

    Returns:
        Loaded and validated Registry.

    Raises:
        typer.Exit: If the registry cannot be loaded.
    """
    import typer

    from amu.utils.formatting import print_error

    try:
        return load_registry(path)
    except ConfigParseError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def commit_registry(registry: Registry, path: Path | None = None) -> Path:
    """Save the registry or exit with an error message.

    Raises:
        typer.Exit: If the registry cannot be written.
    """
    import typer

    from amu.utils.formatting import print_error

    try:
        return save_registry(registry, path)
    except ConfigSaveError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
