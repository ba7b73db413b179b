"""Pydantic model for the scaffold manifest.

The manifest is an ordered list of slash-delimited paths, relative to
both the template root and the target root, naming every file,
directory and symlink the scaffold consists of.
"""

from __future__ import annotations

import posixpath
from pathlib import PureWindowsPath
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScaffoldManifest(BaseModel):
    """Scaffold manifest contents.

    Attributes:
        version: Optional template version label.
        paths: Relative scaffold paths in manifest order. Duplicates are
            allowed and simply processed twice.
    """

    model_config = ConfigDict(extra="ignore")

    version: Annotated[str | None, Field(description="Template version label")] = None
    paths: Annotated[list[str], Field(description="Relative scaffold paths")]

    @field_validator("paths")
    @classmethod
    def validate_relative_paths(cls, paths: list[str]) -> list[str]:
        """Validate that every path stays inside its root."""
        for path in paths:
            if not path or not path.strip():
                msg = "Manifest paths cannot be empty"
                raise ValueError(msg)
            if "\\" in path:
                msg = f"Manifest paths must use '/' separators: {path!r}"
                raise ValueError(msg)
            if path.startswith("/") or PureWindowsPath(path).is_absolute():
                msg = f"Manifest paths must be relative: {path!r}"
                raise ValueError(msg)
            normalized = posixpath.normpath(path)
            if normalized == ".." or normalized.startswith("../"):
                msg = f"Manifest path escapes the root: {path!r}"
                raise ValueError(msg)
            if normalized == ".":
                msg = f"Manifest path refers to the root itself: {path!r}"
                raise ValueError(msg)
        return paths
