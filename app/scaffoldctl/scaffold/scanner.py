"""Conflict scanner for scaffold manifests.

Compares a manifest of relative paths against the live state of a
target root and classifies each path as clean, conflicting or skipped.
The scanner only reads; every per-path failure is captured in the
result instead of being raised.
"""

import logging
import posixpath
import unicodedata
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from scaffoldctl.scaffold.entries import (
    error_code,
    error_message,
    inspect_entry,
    is_not_found,
    resolve_entry,
)
from scaffoldctl.scaffold.models import ConflictReason, ScanConflict, ScanResult

logger = logging.getLogger(__name__)

# Per-path classifications other than a conflict
_CLEAN = "clean"
_SKIPPED = "skipped"


class CaseCheck(str, Enum):
    """When to run the cross-path case-fold collision check.

    Attributes:
        AUTO: Only when the target filesystem is detected as case-insensitive.
        ALWAYS: On every target.
        NEVER: Disabled.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def case_fold_key(rel_path: str) -> str:
    """Compute the key two paths share when a filesystem ignores case.

    Args:
        rel_path: Slash-delimited manifest path.

    Returns:
        Normalized, case-folded path.
    """
    return unicodedata.normalize("NFC", posixpath.normpath(rel_path)).casefold()


def detect_case_insensitive(path: Path) -> bool:
    """Detect whether the filesystem holding ``path`` ignores case.

    Walks up from ``path`` to the nearest existing entry whose name has
    a cased letter and checks whether the swapped-case name resolves to
    the same inode. The walk stops at a mount point so an ancestor on
    another filesystem is never probed. Nothing is created on disk.

    Args:
        path: Target root (need not exist yet).

    Returns:
        True if the filesystem is case-insensitive, False if it is
        case-sensitive or the check was inconclusive.
    """
    probe = path.absolute()
    while True:
        name = probe.name
        swapped = name.swapcase()
        if probe.exists():
            if swapped != name:
                try:
                    return probe.samefile(probe.with_name(swapped))
                except OSError:
                    return False
            if probe.is_mount():
                return False
        parent = probe.parent
        if parent == probe:
            return False
        probe = parent


class ScaffoldScanner:
    """Scans a target root for paths a scaffold copy would clobber.

    Args:
        source_root: Template root the manifest paths are relative to.
        target_root: Repository root the scaffold would be copied into.
        case_check: Policy for the case-fold collision check.
    """

    def __init__(
        self,
        source_root: Path,
        target_root: Path,
        *,
        case_check: CaseCheck = CaseCheck.AUTO,
    ) -> None:
        self._source_root = source_root
        self._target_root = target_root
        self._case_check = case_check

    @property
    def case_check_active(self) -> bool:
        """Whether the case-fold collision check applies to this target."""
        if self._case_check == CaseCheck.ALWAYS:
            return True
        if self._case_check == CaseCheck.NEVER:
            return False
        return detect_case_insensitive(self._target_root)

    def scan(self, manifest_paths: Iterable[str]) -> ScanResult:
        """Classify every manifest path against the target root.

        Args:
            manifest_paths: Relative paths in manifest order.

        Returns:
            ScanResult with each path in exactly one of clean,
            conflicts or skipped.
        """
        paths = tuple(manifest_paths)
        fold_case = self.case_check_active
        logger.debug(
            "Scanning %d manifest paths into %s (case-fold check: %s)",
            len(paths),
            self._target_root,
            fold_case,
        )

        conflicts: list[ScanConflict] = []
        clean: list[str] = []
        skipped: list[str] = []
        claimed: dict[str, str] = {}

        for rel_path in paths:
            outcome = self._scan_path(rel_path)

            if outcome == _SKIPPED:
                logger.debug("Skipped %s: not present in source", rel_path)
                skipped.append(rel_path)
                continue

            if fold_case:
                key = case_fold_key(rel_path)
                owner = claimed.setdefault(key, rel_path)
                if outcome == _CLEAN and posixpath.normpath(owner) != posixpath.normpath(
                    rel_path
                ):
                    logger.debug("Case collision: %s folds onto %s", rel_path, owner)
                    outcome = ScanConflict(
                        path=rel_path,
                        target_path=str(resolve_entry(self._target_root, rel_path)),
                        source_path=str(resolve_entry(self._source_root, rel_path)),
                        reason=ConflictReason.CASE_COLLISION,
                        collides_with=owner,
                    )

            if isinstance(outcome, ScanConflict):
                conflicts.append(outcome)
            else:
                logger.debug("Clean: %s", rel_path)
                clean.append(rel_path)

        return ScanResult(
            manifest_paths=paths,
            conflicts=tuple(conflicts),
            clean=tuple(clean),
            skipped=tuple(skipped),
        )

    def _scan_path(self, rel_path: str) -> ScanConflict | str:
        """Classify a single manifest path.

        Args:
            rel_path: Slash-delimited manifest path.

        Returns:
            _CLEAN, _SKIPPED, or a ScanConflict.
        """
        target_path = resolve_entry(self._target_root, rel_path)
        source_path = resolve_entry(self._source_root, rel_path)

        try:
            discovered = inspect_entry(target_path)
        except OSError as e:
            if is_not_found(e):
                return _CLEAN if self._source_exists(source_path) else _SKIPPED
            logger.warning("Cannot inspect %s: %s", target_path, e)
            return ScanConflict(
                path=rel_path,
                target_path=str(target_path),
                source_path=str(source_path),
                reason=ConflictReason.LOOKUP_ERROR,
                error=error_message(e),
                error_code=error_code(e),
            )

        try:
            expected = inspect_entry(source_path)
        except OSError:
            return _SKIPPED

        logger.debug(
            "Conflict: %s (%s, %d bytes) already exists",
            rel_path,
            discovered.kind.value,
            discovered.size_bytes,
        )
        return ScanConflict(
            path=rel_path,
            target_path=str(target_path),
            source_path=str(source_path),
            reason=ConflictReason.EXISTS,
            discovered=discovered,
            expected=expected,
        )

    @staticmethod
    def _source_exists(source_path: Path) -> bool:
        """Check that a source entry exists, without following symlinks."""
        try:
            inspect_entry(source_path)
        except OSError:
            return False
        return True


def scan(
    source_root: Path,
    target_root: Path,
    manifest_paths: Iterable[str],
    *,
    case_check: CaseCheck = CaseCheck.AUTO,
) -> ScanResult:
    """Scan a target root for conflicts with a scaffold manifest.

    Convenience wrapper around :class:`ScaffoldScanner`.
    """
    return ScaffoldScanner(source_root, target_root, case_check=case_check).scan(manifest_paths)
