"""Color theme for cleanctl output.

Colors come from the bundled ``data/theme.toml``. A ``theme.toml`` in the
user config directory may redefine any subset of them.
"""

import logging
import string
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from cleanctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)


class ThemeColors(BaseModel):
    """Named colors used by the CLI, as ``#RGB`` or ``#RRGGBB`` strings."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    kind_file: str = "#0e8ac8"
    kind_directory: str = "#c1ff62"
    deleted: str = "#f53263"
    skipped: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, v: object, info: Any) -> str:
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if color[:1] != "#":
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        digits = color[1:]
        if len(digits) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        if not _HEX_DIGITS.issuperset(digits):
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg)
        return color


# Rich style name -> (color field, bold)
_STYLE_MAP: dict[str, tuple[str, bool]] = {
    "text": ("text", False),
    "muted": ("muted", False),
    "dim": ("muted", False),
    "header": ("header", False),
    "bold_header": ("header", True),
    "border": ("border", False),
    "success": ("success", False),
    "warning": ("warning", False),
    "error": ("error", True),
    "info": ("info", False),
    "path": ("text", True),
    "kind.file": ("kind_file", False),
    "kind.directory": ("kind_directory", True),
    "outcome.deleted": ("deleted", False),
    "outcome.skipped": ("skipped", False),
    "outcome.failed": ("error", True),
}


def get_bundled_theme_path() -> Path:
    """Return the path of the theme shipped with the package."""
    return resources.files("cleanctl.data").joinpath("theme.toml")  # type: ignore[return-value]


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Returns:
        String-valued colors, or None if the file is absent or unusable.
    """
    try:
        data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {name: value for name, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Build the effective colors: bundled theme, then user overrides.

    An invalid combination falls back to the built-in defaults.
    """
    colors: dict[str, str] = {}
    for source in (Path(get_bundled_theme_path()), get_user_theme_path()):
        layer = _load_toml_colors(source)
        if layer:
            logger.debug("Applying %d theme color(s) from %s", len(layer), source)
            colors.update(layer)

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme configuration, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Map theme colors onto the Rich style names the CLI prints with."""
    if colors is None:
        colors = load_theme()
    palette = colors.model_dump()
    return Theme(
        {
            style: f"bold {palette[field]}" if bold else palette[field]
            for style, (field, bold) in _STYLE_MAP.items()
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
