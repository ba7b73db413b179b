"""Scaffold domain models for conflict scanning and copying.

This module defines the data structures produced by the conflict
scanner and the copy engine: entry descriptors, conflict records,
scan results, and copy outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EntryKind(str, Enum):
    """Type of a filesystem entry, determined without following symlinks.

    Attributes:
        FILE: Regular file (or any non-directory, non-symlink entry).
        DIRECTORY: Directory.
        SYMLINK: Symbolic link, live or dead.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class ConflictReason(str, Enum):
    """Why a manifest path blocks the copy phase.

    Attributes:
        EXISTS: An object already occupies the target path.
        LOOKUP_ERROR: The target lookup failed for a reason other than not-found.
        CASE_COLLISION: Another manifest path folds to the same key on a
            case-insensitive target.
    """

    EXISTS = "exists"
    LOOKUP_ERROR = "lookup_error"
    CASE_COLLISION = "case_collision"


@dataclass(frozen=True, slots=True)
class EntryDescriptor:
    """Result of inspecting a single path with lstat.

    Only ``kind`` and ``size_bytes`` take part in comparisons; ``mode``
    is carried for reporting and for permission preservation.

    Attributes:
        kind: Entry type.
        size_bytes: Size reported by lstat (link text length for symlinks).
        mode: Raw st_mode bits.
    """

    kind: EntryKind
    size_bytes: int
    mode: int = 0

    def matches(self, other: EntryDescriptor) -> bool:
        """Check whether two descriptors agree on kind and size."""
        return self.kind == other.kind and self.size_bytes == other.size_bytes

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.kind.value,
            "size": self.size_bytes,
            "mode": self.mode,
        }


@dataclass(frozen=True, slots=True)
class ScanConflict:
    """A manifest path that prevents the copy phase from running.

    Exactly one group of optional fields is populated depending on
    ``reason``: descriptors for EXISTS, error fields for LOOKUP_ERROR,
    and ``collides_with`` for CASE_COLLISION.

    Attributes:
        path: Manifest-relative path.
        target_path: Absolute path inside the target root.
        source_path: Absolute path inside the source root.
        reason: Conflict classification.
        discovered: Descriptor of the object found at the target.
        expected: Descriptor of the corresponding source entry.
        error: Error message for lookup failures.
        error_code: Errno name for lookup failures (e.g. "EACCES").
        collides_with: Earlier manifest path sharing the case-folded key.
    """

    path: str
    target_path: str
    source_path: str
    reason: ConflictReason
    discovered: EntryDescriptor | None = None
    expected: EntryDescriptor | None = None
    error: str | None = None
    error_code: str | None = None
    collides_with: str | None = None

    def __post_init__(self) -> None:
        """Validate conflict data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.reason == ConflictReason.EXISTS and (
            self.discovered is None or self.expected is None
        ):
            msg = "Existing-entry conflicts require both descriptors"
            raise ValueError(msg)
        if self.reason == ConflictReason.LOOKUP_ERROR and self.error_code is None:
            msg = "Lookup error conflicts require an error code"
            raise ValueError(msg)
        if self.reason == ConflictReason.CASE_COLLISION and not self.collides_with:
            msg = "Case collision conflicts require the colliding path"
            raise ValueError(msg)

    @property
    def is_error(self) -> bool:
        """Check if the conflict stems from a failed lookup."""
        return self.reason == ConflictReason.LOOKUP_ERROR

    @property
    def differs(self) -> bool:
        """Check if the target entry differs from the source in kind or size."""
        if self.discovered is None or self.expected is None:
            return True
        return not self.discovered.matches(self.expected)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "path": self.path,
            "targetPath": self.target_path,
            "sourcePath": self.source_path,
            "reason": self.reason.value,
        }
        if self.discovered is not None:
            data["discovered"] = self.discovered.to_dict()
        if self.expected is not None:
            data["expected"] = self.expected.to_dict()
        if self.error is not None:
            data["error"] = self.error
            data["errorCode"] = self.error_code
        if self.collides_with is not None:
            data["collidesWith"] = self.collides_with
        return data


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of scanning a manifest against a target root.

    Every manifest path lands in exactly one of ``clean``, ``conflicts``
    or ``skipped``.

    Attributes:
        manifest_paths: Paths that were scanned, in manifest order.
        conflicts: Paths that block the copy phase.
        clean: Paths absent from the target and present in the source.
        skipped: Paths absent from the source root (stale manifest entries).
    """

    manifest_paths: tuple[str, ...]
    conflicts: tuple[ScanConflict, ...] = ()
    clean: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate that every manifest path was classified exactly once."""
        classified = len(self.conflicts) + len(self.clean) + len(self.skipped)
        if classified != len(self.manifest_paths):
            msg = (
                f"Scan classified {classified} paths but the manifest "
                f"has {len(self.manifest_paths)}"
            )
            raise ValueError(msg)

    @property
    def has_conflicts(self) -> bool:
        """Check if any path blocks the copy phase."""
        return bool(self.conflicts)

    @property
    def summary(self) -> dict[str, int]:
        """Path counts by classification."""
        return {
            "total": len(self.manifest_paths),
            "conflicts": len(self.conflicts),
            "clean": len(self.clean),
            "skipped": len(self.skipped),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "manifest": list(self.manifest_paths),
            "conflicts": [c.to_dict() for c in self.conflicts],
            "clean": list(self.clean),
            "skipped": list(self.skipped),
            "summary": self.summary,
        }


@dataclass(frozen=True, slots=True)
class CopyError:
    """Failure to materialize a single manifest path.

    Attributes:
        path: Manifest-relative path.
        source_path: Absolute source path.
        target_path: Absolute target path.
        message: Human-readable error message.
        code: Errno name (e.g. "ENOENT", "EEXIST").
    """

    path: str
    source_path: str
    target_path: str
    message: str
    code: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "sourcePath": self.source_path,
            "targetPath": self.target_path,
            "message": self.message,
            "code": self.code,
        }


@dataclass(slots=True)
class CopyResult:
    """Aggregate outcome of a copy batch.

    Directories are ensured as a side effect and listed in
    ``directories`` but never counted as written entries.

    Attributes:
        files_written: Number of regular files copied.
        symlinks_copied: Number of symlinks recreated.
        directories: Manifest paths that were directories.
        errors: Per-path failures.
    """

    files_written: int = 0
    symlinks_copied: int = 0
    directories: list[str] = field(default_factory=list)
    errors: list[CopyError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if every path was materialized."""
        return not self.errors

    @property
    def entries_written(self) -> int:
        """Number of files and symlinks created."""
        return self.files_written + self.symlinks_copied

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "filesWritten": self.files_written,
            "symlinksCopied": self.symlinks_copied,
            "directories": list(self.directories),
            "errors": [e.to_dict() for e in self.errors],
        }
