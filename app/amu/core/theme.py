"""Color theme for amu output.

Colors are grouped the way amu renders them: one per status severity,
one per planned link action, and a few interface colors for headings
and secondary text. Each group of the bundled ``data/theme.toml`` can be
overridden key by key from ``theme.toml`` in the amu config directory.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from rich.color import Color, ColorParseError
from rich.theme import Theme

from amu.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.toml"


class _ColorGroup(BaseModel):
    """A group of named colors, each anything Rich can parse."""

    model_config = ConfigDict(extra="forbid")

    @field_validator("*")
    @classmethod
    def validate_color(cls, value: str) -> str:
        try:
            Color.parse(value)
        except ColorParseError as e:
            raise ValueError(str(e)) from e
        return value


class SeverityColors(_ColorGroup):
    """Colors of the status glyphs and summary counters."""

    ok: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"


class ActionColors(_ColorGroup):
    """Colors of planned link operations."""

    link: str = "#c1ff62"
    unlink: str = "#f53263"
    skip: str = "#0e8ac8"


class InterfaceColors(_ColorGroup):
    """Colors of headings, tables and secondary text."""

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    info: str = "#0ec1c8"


class ThemeConfig(BaseModel):
    """All color groups of the theme file.

    Attributes:
        severity: ``[severity]`` table.
        actions: ``[actions]`` table.
        interface: ``[interface]`` table.
    """

    model_config = ConfigDict(extra="forbid")

    severity: SeverityColors = Field(default_factory=SeverityColors)
    actions: ActionColors = Field(default_factory=ActionColors)
    interface: InterfaceColors = Field(default_factory=InterfaceColors)


def _read_groups(path: Path) -> dict[str, dict[str, object]]:
    """Read the color tables of a theme file.

    A missing file has no tables. An unreadable file is logged and
    ignored, as are top-level keys that are not tables.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}
    return {name: table for name, table in data.items() if isinstance(table, dict)}


def load_theme_config(user_path: Path | None = None) -> ThemeConfig:
    """Merge the user's theme over the bundled one.

    Args:
        user_path: User theme file. Defaults to ``theme.toml`` in the
            amu config directory.

    Returns:
        Validated theme. Falls back to the built-in colors when the
        merged result does not validate.
    """
    bundled = _read_groups(Path(str(resources.files("amu.data").joinpath(THEME_FILENAME))))
    user = _read_groups(user_path or get_config_dir() / THEME_FILENAME)

    merged = {
        group: {**bundled.get(group, {}), **user.get(group, {})}
        for group in set(bundled) | set(user)
    }
    try:
        return ThemeConfig.model_validate(merged)
    except ValidationError as e:
        logger.warning("Invalid theme, using built-in colors: %s", e)
        return ThemeConfig()


def build_theme(config: ThemeConfig) -> Theme:
    """Map the color groups onto the style names used in console markup."""
    severity, actions, ui = config.severity, config.actions, config.interface
    return Theme(
        {
            "success": severity.ok,
            "warning": severity.warning,
            "error": f"bold {severity.error}",
            "linked": actions.link,
            "unlinked": actions.unlink,
            "skipped": actions.skip,
            "text": ui.text,
            "muted": ui.muted,
            "info": ui.info,
            "border": ui.border,
            "header": ui.header,
            "bold_header": f"bold {ui.header}",
            "target": f"bold {ui.header}",
        }
    )


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return build_theme(load_theme_config())
