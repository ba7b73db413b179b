"""Scaffold copy engine.

Materializes clean manifest paths from a source root into a target
root, preserving entry type, symlink text and permission bits. Errors
are isolated per path so one failure never aborts the batch.

The caller must pass only the clean paths of a conflict-free scan.
With ``verify_absent`` enabled the engine re-checks each target right
before writing and refuses to overwrite anything that appeared after
the scan; with it disabled existing files are overwritten.
"""

import errno
import logging
import os
import posixpath
import shutil
import stat
from collections.abc import Iterable
from pathlib import Path

from scaffoldctl.scaffold.entries import (
    error_code,
    error_message,
    inspect_entry,
    is_not_found,
    resolve_entry,
)
from scaffoldctl.scaffold.models import CopyError, CopyResult, EntryDescriptor, EntryKind

logger = logging.getLogger(__name__)


class ScaffoldCopier:
    """Copies scaffold entries from a source root into a target root.

    Attributes:
        _source_root: Template root; never modified.
        _target_root: Destination root.
        _verify_absent: Re-check each target immediately before writing.
    """

    def __init__(
        self,
        source_root: Path,
        target_root: Path,
        *,
        verify_absent: bool = True,
    ) -> None:
        """Initialize the ScaffoldCopier.

        Args:
            source_root: Template root the manifest paths are relative to.
            target_root: Repository root to copy into.
            verify_absent: If True, convert a target that appeared after
                the scan into a per-path EEXIST error instead of
                overwriting it.
        """
        self._source_root = source_root
        self._target_root = target_root
        self._verify_absent = verify_absent

    def copy(self, clean_paths: Iterable[str]) -> CopyResult:
        """Copy every path, recording failures instead of raising.

        Args:
            clean_paths: Clean paths from a prior scan, in order.

        Returns:
            CopyResult with per-kind counters and per-path errors.
        """
        result = CopyResult()
        # Paths written earlier in this batch; a repeat rewrites its own entry
        materialized: set[str] = set()

        for rel_path in clean_paths:
            source_path = resolve_entry(self._source_root, rel_path)
            target_path = resolve_entry(self._target_root, rel_path)
            key = posixpath.normpath(rel_path)

            try:
                kind = self._copy_single(source_path, target_path, repeat=key in materialized)
            except OSError as e:
                logger.warning("Failed to copy %s: %s", rel_path, e)
                result.errors.append(
                    CopyError(
                        path=rel_path,
                        source_path=str(source_path),
                        target_path=str(target_path),
                        message=error_message(e),
                        code=error_code(e),
                    )
                )
                continue

            materialized.add(key)
            if kind == EntryKind.SYMLINK:
                result.symlinks_copied += 1
            elif kind == EntryKind.FILE:
                result.files_written += 1
            else:
                result.directories.append(rel_path)

        logger.info(
            "Copied %d files and %d symlinks into %s (%d errors)",
            result.files_written,
            result.symlinks_copied,
            self._target_root,
            len(result.errors),
        )
        return result

    def _copy_single(
        self, source_path: Path, target_path: Path, *, repeat: bool = False
    ) -> EntryKind:
        """Materialize one entry at the target.

        Dispatches on the lstat type of the source:
        - Symlinks: recreated with the verbatim link text
        - Regular files: byte copy, then source permission bits
        - Directories: created (contents are separate manifest entries)

        Args:
            source_path: Absolute source path.
            target_path: Absolute target path.
            repeat: The same path was already written in this batch. The
                re-check is skipped and an identical symlink is kept.

        Returns:
            Kind of entry that was materialized.

        Raises:
            OSError: On any failure, including a late-appearing target.
        """
        target_path.parent.mkdir(parents=True, exist_ok=True)

        source = inspect_entry(source_path)

        if source.kind == EntryKind.DIRECTORY:
            target_path.mkdir(parents=True, exist_ok=True)
            logger.debug("Ensured directory %s", target_path)
            return EntryKind.DIRECTORY

        if self._verify_absent and not repeat:
            self._ensure_absent(target_path)

        if source.kind == EntryKind.SYMLINK:
            link_text = os.readlink(source_path)
            if repeat and _link_text(target_path) == link_text:
                return EntryKind.SYMLINK
            os.symlink(link_text, target_path)
            logger.debug("Linked %s -> %s", target_path, link_text)
            return EntryKind.SYMLINK

        if not stat.S_ISREG(source.mode):
            raise OSError(errno.EINVAL, "Unsupported entry type", str(source_path))

        self._copy_file(source_path, target_path, source)
        return EntryKind.FILE

    @staticmethod
    def _copy_file(source_path: Path, target_path: Path, source: EntryDescriptor) -> None:
        """Copy file bytes and apply the source permission bits."""
        shutil.copyfile(source_path, target_path, follow_symlinks=False)
        os.chmod(target_path, stat.S_IMODE(source.mode))
        logger.debug("Wrote %s (mode %o)", target_path, stat.S_IMODE(source.mode))

    @staticmethod
    def _ensure_absent(target_path: Path) -> None:
        """Raise FileExistsError if something now occupies the target path."""
        try:
            inspect_entry(target_path)
        except OSError as e:
            if is_not_found(e):
                return
            raise
        raise FileExistsError(
            errno.EEXIST, "Target appeared after scan; refusing to overwrite", str(target_path)
        )


def _link_text(path: Path) -> str | None:
    """Return the text of the symlink at path, or None if it is not one."""
    try:
        return os.readlink(path)
    except OSError:
        return None


def copy(
    source_root: Path,
    target_root: Path,
    clean_paths: Iterable[str],
    *,
    verify_absent: bool = True,
) -> CopyResult:
    """Copy clean scaffold paths from source to target.

    Convenience wrapper around :class:`ScaffoldCopier`.
    """
    return ScaffoldCopier(source_root, target_root, verify_absent=verify_absent).copy(clean_paths)
