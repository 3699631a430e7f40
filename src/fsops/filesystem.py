"""Filesystem abstraction for testability.

This module provides the production ``FileSystem`` backend. The
RealFileSystem implementation wraps standard library ``os`` and
``shutil`` operations; operations in this package only reach the disk
through it (or through an injected substitute).
"""

from __future__ import annotations

import errno
import os
import shutil
import stat

from fsops.types import DirEntry, EntryKind, EntryStat

_DEFAULT_DIR_MODE = 0o777
_DEFAULT_FILE_MODE = 0o666


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library os and shutil operations.
    Satisfies the FileSystem and SupportsRemoveTree protocols structurally.
    """

    def stat(self, path: str) -> EntryStat:
        """Stat a path, following symlinks."""
        return EntryStat.from_os(os.stat(path))

    def lstat(self, path: str) -> EntryStat:
        """Stat a path without following a final symlink."""
        return EntryStat.from_os(os.lstat(path))

    def readdir(self, path: str) -> list[DirEntry]:
        """List a directory with typed entries."""
        entries = []
        with os.scandir(path) as it:
            for entry in it:
                if entry.is_symlink():
                    kind = EntryKind.SYMLINK
                elif entry.is_dir(follow_symlinks=False):
                    kind = EntryKind.DIRECTORY
                elif entry.is_file(follow_symlinks=False):
                    kind = EntryKind.FILE
                else:
                    kind = EntryKind.OTHER
                entries.append(DirEntry(name=entry.name, kind=kind))
        return entries

    def readlink(self, path: str) -> str:
        """Return the target text of a symlink."""
        return os.readlink(path)

    def symlink(self, target: str, path: str) -> None:
        """Create a symlink."""
        os.symlink(target, path)

    def unlink(self, path: str) -> None:
        """Remove a file or symlink."""
        os.unlink(path)

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        os.rmdir(path)

    def mkdir(self, path: str, mode: int | None = None, parents: bool = False) -> None:
        """Create a directory.

        With ``parents`` every missing ancestor is created with ``mode`` too,
        and an existing directory at ``path`` is accepted.
        """
        if mode is None:
            mode = _DEFAULT_DIR_MODE
        if not parents:
            os.mkdir(path, mode)
            return

        missing = []
        current = os.path.abspath(path)
        while not os.path.lexists(current):
            missing.append(current)
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        if not missing and not os.path.isdir(current):
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), path)

        for directory in reversed(missing):
            try:
                os.mkdir(directory, mode)
            except FileExistsError:
                # Created concurrently.
                if not os.path.isdir(directory):
                    raise

    def rename(self, src: str, dest: str) -> None:
        """Rename an entry."""
        os.rename(src, dest)

    def copy_file(self, src: str, dest: str) -> None:
        """Copy file content."""
        shutil.copyfile(src, dest)

    def chmod(self, path: str, mode: int) -> None:
        """Set permission bits."""
        os.chmod(path, mode)

    def utimes(self, path: str, atime_ns: int, mtime_ns: int) -> None:
        """Set access and modification times."""
        os.utime(path, ns=(atime_ns, mtime_ns))

    def write_file(self, path: str, data: str | bytes, mode: int | None = None) -> None:
        """Create or truncate a file and write data."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
        fd = os.open(path, flags, _DEFAULT_FILE_MODE if mode is None else mode)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)

    def rm(self, path: str) -> None:
        """Remove a path recursively, ignoring a missing target."""
        try:
            mode = os.lstat(path).st_mode
        except FileNotFoundError:
            return
        try:
            if stat.S_ISDIR(mode):
                shutil.rmtree(path)
            else:
                os.unlink(path)
        except FileNotFoundError:
            return
