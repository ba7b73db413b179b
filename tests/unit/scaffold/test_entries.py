"""Unit tests for filesystem entry inspection helpers."""

import errno
import os
import stat
from pathlib import Path

import pytest
from scaffoldctl.scaffold.entries import (
    UNKNOWN_ERROR_CODE,
    error_code,
    error_message,
    inspect_entry,
    is_not_found,
    kind_from_mode,
    resolve_entry,
)
from scaffoldctl.scaffold.models import EntryKind


class TestKindFromMode:
    """Tests for kind_from_mode."""

    @pytest.mark.parametrize(
        ("mode", "kind"),
        [
            (stat.S_IFREG | 0o644, EntryKind.FILE),
            (stat.S_IFDIR | 0o755, EntryKind.DIRECTORY),
            (stat.S_IFLNK | 0o777, EntryKind.SYMLINK),
            (stat.S_IFIFO | 0o644, EntryKind.FILE),
        ],
    )
    def test_mapping(self, mode: int, kind: EntryKind) -> None:
        """st_mode bits map onto the three entry kinds."""
        assert kind_from_mode(mode) == kind


class TestInspectEntry:
    """Tests for inspect_entry."""

    def test_file(self, tmp_path: Path) -> None:
        """Regular files report their size and mode."""
        path = tmp_path / "f.txt"
        path.write_text("12345")

        descriptor = inspect_entry(path)

        assert descriptor.kind == EntryKind.FILE
        assert descriptor.size_bytes == 5
        assert stat.S_ISREG(descriptor.mode)

    def test_symlink_not_followed(self, tmp_path: Path) -> None:
        """Symlinks to directories are described as symlinks."""
        (tmp_path / "dir").mkdir()
        link = tmp_path / "link"
        link.symlink_to("dir")

        assert inspect_entry(link).kind == EntryKind.SYMLINK

    def test_missing_raises_not_found(self, tmp_path: Path) -> None:
        """Missing paths raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            inspect_entry(tmp_path / "missing")


class TestErrorHelpers:
    """Tests for errno helpers."""

    def test_is_not_found(self) -> None:
        """Only ENOENT counts as not-found."""
        assert is_not_found(FileNotFoundError(errno.ENOENT, "No such file"))
        assert not is_not_found(PermissionError(errno.EACCES, "Permission denied"))
        assert not is_not_found(NotADirectoryError(errno.ENOTDIR, "Not a directory"))

    def test_error_code(self) -> None:
        """Errno values map to their symbolic names."""
        assert error_code(PermissionError(errno.EACCES, "Permission denied")) == "EACCES"
        assert error_code(OSError("no errno")) == UNKNOWN_ERROR_CODE

    def test_error_message_includes_filename(self) -> None:
        """Messages name the offending file when known."""
        exc = FileNotFoundError(errno.ENOENT, "No such file or directory", "/x/y")
        assert error_message(exc) == "No such file or directory: /x/y"

    def test_error_message_without_strerror(self) -> None:
        """Plain OSErrors fall back to str()."""
        assert error_message(OSError("plain failure")) == "plain failure"


def test_resolve_entry_splits_on_slashes(tmp_path: Path) -> None:
    """Manifest paths are joined component by component."""
    assert resolve_entry(tmp_path, "a/b/c.txt") == tmp_path / "a" / "b" / "c.txt"
    assert os.fspath(resolve_entry(tmp_path, "top")) == os.fspath(tmp_path / "top")
