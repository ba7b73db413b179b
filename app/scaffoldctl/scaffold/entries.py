"""Filesystem entry inspection shared by the scanner and the copier.

All lookups use lstat so that symlinks are described as links rather
than as whatever they point at. Not-found is signalled by the
FileNotFoundError raised from lstat; every other OSError is a real
failure that callers must record.
"""

import errno
import os
import stat
from pathlib import Path

from scaffoldctl.scaffold.models import EntryDescriptor, EntryKind

UNKNOWN_ERROR_CODE = "UNKNOWN"


def kind_from_mode(mode: int) -> EntryKind:
    """Map st_mode bits to an EntryKind.

    Symlinks are checked first; anything that is neither a link nor a
    directory (fifos, sockets, devices) is reported as a file.

    Args:
        mode: Raw st_mode value from lstat.

    Returns:
        EntryKind classification.
    """
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.FILE


def inspect_entry(path: Path) -> EntryDescriptor:
    """Describe a path without following symlinks.

    Args:
        path: Path to inspect.

    Returns:
        EntryDescriptor for the path.

    Raises:
        FileNotFoundError: If nothing exists at the path.
        OSError: For any other lookup failure (permission, I/O).
    """
    st = path.lstat()
    return EntryDescriptor(
        kind=kind_from_mode(st.st_mode),
        size_bytes=st.st_size,
        mode=st.st_mode,
    )


def is_not_found(exc: OSError) -> bool:
    """Check whether an OSError means the path does not exist."""
    return isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT


def error_code(exc: OSError) -> str:
    """Get the symbolic errno name of an OSError (e.g. "EACCES")."""
    if exc.errno is None:
        return UNKNOWN_ERROR_CODE
    return errno.errorcode.get(exc.errno, UNKNOWN_ERROR_CODE)


def error_message(exc: OSError) -> str:
    """Get a readable message for an OSError, preferring strerror."""
    if exc.strerror:
        if exc.filename is not None:
            return f"{exc.strerror}: {os.fsdecode(exc.filename)}"
        return exc.strerror
    return str(exc) or exc.__class__.__name__


def resolve_entry(root: Path, rel_path: str) -> Path:
    """Join a slash-delimited manifest path onto a root directory."""
    return root.joinpath(*rel_path.split("/"))
