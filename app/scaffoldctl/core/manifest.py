"""Scaffold manifest file I/O.

This module loads the manifest shipped with a template root, in JSON
(``{"paths": [...]}``) or TOML (``paths = [...]``) format, and validates
it with the ScaffoldManifest Pydantic model.
"""

import json
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from scaffoldctl.core.paths import get_manifest_path
from scaffoldctl.scaffold.manifest import ScaffoldManifest


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when manifest file is not found."""


class ManifestParseError(ManifestError):
    """Raised when manifest file cannot be parsed."""


class ManifestValidationError(ManifestError):
    """Raised when manifest content is invalid."""


def load_manifest(path: Path) -> ScaffoldManifest:
    """Load and validate a scaffold manifest.

    The format is chosen by file suffix: ``.toml`` is parsed as TOML,
    anything else as JSON.

    Args:
        path: Path to the manifest file.

    Returns:
        Validated ScaffoldManifest object.

    Raises:
        ManifestNotFoundError: If the manifest file doesn't exist.
        ManifestParseError: If the file syntax is invalid.
        ManifestValidationError: If the content doesn't match the schema.
    """
    if not path.is_file():
        raise ManifestNotFoundError(f"Manifest not found: {path}")

    data: Any
    try:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
        else:
            data = json.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestParseError(f"Invalid manifest syntax in {path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read manifest: {e}") from e

    try:
        return ScaffoldManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestValidationError(f"Invalid manifest content: {e}") from e


def load_source_manifest(source_root: Path, manifest: str | Path | None = None) -> ScaffoldManifest:
    """Load the manifest belonging to a template root.

    Args:
        source_root: Template root directory.
        manifest: Explicit manifest path (relative to the source root or
            absolute), or None for ``manifest/scaffold.json``.

    Returns:
        Validated ScaffoldManifest object.

    Raises:
        ManifestError: If the manifest cannot be loaded.
    """
    return load_manifest(get_manifest_path(source_root, manifest))
