"""Theme management for scaffoldctl CLI.

Colors come from the ThemeColors defaults, optionally overridden by a
``[colors]`` table in ~/.config/scaffoldctl/theme.toml. Report styles
(clean, conflict, skipped) are derived from them.
"""

import logging
import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from scaffoldctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]{3}|[0-9a-fA-F]{6}")

# Styles rendered bold on top of their base color
_BOLD_STYLES = frozenset({"error", "conflict"})


class ThemeColors(BaseModel):
    """Colors used by scaffoldctl output (#RRGGBB or #RGB)."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Scan classification
    clean: str = "#c1ff62"
    conflict: str = "#f53263"
    skipped: str = "#226666"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        if not _HEX_DIGITS.fullmatch(color[1:]):
            msg = f"{info.field_name}: invalid hex color '{color}' (expected #RGB or #RRGGBB)"
            raise ValueError(msg)
        return color


def _read_color_overrides(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are dropped. Returns None when the file is
    missing, unreadable, or has no usable table.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors")
    if not isinstance(table, dict):
        logger.warning("Theme file %s has no [colors] table", path)
        return None
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colors, applying user overrides on top of the defaults.

    An invalid override file is logged and ignored.

    Args:
        path: Theme override file. If None, uses ~/.config/scaffoldctl/theme.toml.
    """
    theme_path = path or get_user_theme_path()
    overrides = _read_color_overrides(theme_path)
    if not overrides:
        return ThemeColors()

    try:
        colors = ThemeColors(**overrides)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()
    logger.debug("Loaded user theme overrides from %s", theme_path)
    return colors


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich Theme with one style per color plus ``bold_header``.

    Args:
        colors: Colors to use. If None, loads them via load_theme().
    """
    if colors is None:
        colors = load_theme()

    styles = {
        name: f"bold {value}" if name in _BOLD_STYLES else value
        for name, value in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme


def reload_theme() -> Theme:
    """Reload the theme from configuration and replace the cached one."""
    global _cached_theme
    _cached_theme = get_rich_theme()
    return _cached_theme
