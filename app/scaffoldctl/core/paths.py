"""XDG-compliant path management for scaffoldctl.

This module provides standardized paths following the XDG Base Directory
Specification for user configuration, plus the default location of the
scaffold manifest inside a template root.

XDG defaults:
- Config: ~/.config/scaffoldctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "scaffoldctl"

# Manifest location relative to the template (source) root
DEFAULT_MANIFEST_RELPATH = "manifest/scaffold.json"


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
        Path to ~/.config/scaffoldctl/ (or XDG_CONFIG_HOME/scaffoldctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/scaffoldctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/scaffoldctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_manifest_path(source_root: Path, manifest: str | Path | None = None) -> Path:
    """Resolve the manifest file for a template root.

    Relative manifest paths are resolved against the source root;
    absolute ones are returned unchanged.

    Args:
        source_root: Template root directory.
        manifest: Explicit manifest path, or None for the default.

    Returns:
        Path to the manifest file.
    """
    candidate = Path(manifest) if manifest is not None else Path(DEFAULT_MANIFEST_RELPATH)
    if candidate.is_absolute():
        return candidate
    return source_root / candidate
