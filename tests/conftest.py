"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest

# Manifest shipped by the sample template
TEMPLATE_PATHS: list[str] = [
    "AGENTS.md",
    "scripts/setup.sh",
    "docs",
    "docs/guide.md",
    "links/agents.md",
]


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def template(tmp_path: Path) -> Path:
    """Create a template root with a file, an executable, a directory and a symlink."""
    root = tmp_path / "template"
    (root / "scripts").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "links").mkdir()
    (root / "manifest").mkdir()

    (root / "AGENTS.md").write_text("# Agents\n")
    setup = root / "scripts" / "setup.sh"
    setup.write_text("#!/bin/sh\necho setup\n")
    os.chmod(setup, 0o755)
    (root / "docs" / "guide.md").write_text("guide\n")
    (root / "links" / "agents.md").symlink_to("../AGENTS.md")

    (root / "manifest" / "scaffold.json").write_text(json.dumps({"paths": TEMPLATE_PATHS}))
    return root


@pytest.fixture
def target(tmp_path: Path) -> Path:
    """Create an empty target repository."""
    root = tmp_path / "target"
    root.mkdir()
    return root


def _snapshot_tree(root: Path) -> dict[str, tuple[str, bytes | str | None]]:
    """Capture every entry under root with its type and content."""
    entries: dict[str, tuple[str, bytes | str | None]] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        if path.is_symlink():
            entries[rel] = ("symlink", os.readlink(path))
        elif path.is_dir():
            entries[rel] = ("directory", None)
        else:
            entries[rel] = ("file", path.read_bytes())
    return entries


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, tuple[str, bytes | str | None]]]:
    """Return a function that captures a directory tree for before/after comparison."""
    return _snapshot_tree


@pytest.fixture
def template_paths() -> list[str]:
    """Manifest paths of the sample template."""
    return list(TEMPLATE_PATHS)
