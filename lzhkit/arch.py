"""File system operations used when extracting archived files.

On Windows, ownership, permissions and symbolic links are not applied.
"""

from __future__ import annotations

import enum
import os
import sys

_IS_WINDOWS = sys.platform == "win32"

# FILETIME counts 100ns ticks from 1601-01-01; this is 1970-01-01.
FILETIME_UNIX_EPOCH = 116444736000000000
_NS_PER_FILETIME_TICK = 100


class FileType(enum.Enum):
    """What, if anything, exists at a path."""

    NONE = enum.auto()
    FILE = enum.auto()
    DIRECTORY = enum.auto()
    ERROR = enum.auto()


def _filetime_to_ns(filetime):
    return (filetime - FILETIME_UNIX_EPOCH) * _NS_PER_FILETIME_TICK


def mkdir(path, unix_perms=0o777):
    """Create a directory; ``unix_perms`` is ignored on Windows.

    Raises :class:`OSError` if the directory cannot be created.
    """
    if _IS_WINDOWS:
        os.mkdir(path)
    else:
        os.mkdir(path, unix_perms)


def chown(filename, unix_uid, unix_gid):
    """Change the owner and group of a file; does nothing on Windows."""
    if not _IS_WINDOWS:
        os.chown(filename, unix_uid, unix_gid)


def chmod(filename, unix_perms):
    """Change the permissions of a file; does nothing on Windows."""
    if not _IS_WINDOWS:
        os.chmod(filename, unix_perms)


def utime(filename, timestamp):
    """Set the access and modification times to a Unix ``timestamp``."""
    os.utime(filename, (timestamp, timestamp))


def set_windows_timestamps(filename, creation_time, modification_time,
                           access_time):
    """Set file times from 64-bit Windows FILETIME values.

    The access and modification times are applied; the creation time
    cannot be set through the portable interface and is not changed.
    """
    os.utime(filename, ns=(_filetime_to_ns(access_time),
                           _filetime_to_ns(modification_time)))


def _remove_quietly(path):
    try:
        os.unlink(path)
    except OSError:
        pass


def open_new_file(filename, unix_uid=-1, unix_gid=-1, unix_perms=-1):
    """Create ``filename`` afresh and return it opened for binary writing.

    Any existing file is removed first and the new file is created
    exclusively, so a symbolic link at that path is never followed.
    Ownership is set when ``unix_uid`` is not negative (failure to do so is
    ignored), then permissions when ``unix_perms`` is not negative.
    Raises :class:`OSError` on failure.
    """
    if _IS_WINDOWS:
        return open(filename, "wb")

    _remove_quietly(filename)

    fd = os.open(filename, os.O_CREAT | os.O_WRONLY | os.O_EXCL, 0o600)

    try:
        if unix_uid >= 0:
            try:
                os.fchown(fd, unix_uid, unix_gid)
            except OSError:
                # Usually only root may change ownership; not fatal.
                pass

        # Permissions go on after ownership so the wrong group never
        # briefly holds them.
        if unix_perms >= 0:
            os.fchmod(fd, unix_perms)

        return os.fdopen(fd, "wb")
    except BaseException:
        os.close(fd)
        _remove_quietly(filename)
        raise


def exists(filename):
    """Return the :class:`FileType` of whatever is at ``filename``."""
    try:
        info = os.stat(filename)
    except FileNotFoundError:
        return FileType.NONE
    except OSError:
        return FileType.NONE if _IS_WINDOWS else FileType.ERROR

    if os.path.isdir(filename):
        return FileType.DIRECTORY
    return FileType.FILE if info is not None else FileType.NONE


def symlink(path, target):
    """Create a symbolic link at ``path`` pointing to ``target``.

    Anything already at ``path`` is replaced. Does nothing on Windows.
    Raises :class:`OSError` if the link cannot be created.
    """
    if _IS_WINDOWS:
        return
    _remove_quietly(path)
    os.symlink(target, path)