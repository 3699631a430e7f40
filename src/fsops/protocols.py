"""Protocol definitions for the injected capabilities.

Operations never touch ``os`` directly. They talk to a ``FileSystem``
backend and a ``PathModule`` for path decomposition, so alternate
backends (sandboxed, in-memory, remote) can be substituted without
inheritance.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fsops.types import DirEntry, EntryStat


@runtime_checkable
class PathModule(Protocol):
    """Protocol for path string manipulation.

    ``os.path``, ``posixpath`` and ``ntpath`` satisfy it as modules.
    """

    sep: str

    def dirname(self, p: str) -> str: ...

    def basename(self, p: str) -> str: ...

    def join(self, a: str, *paths: str) -> str: ...

    def abspath(self, p: str) -> str: ...

    def isabs(self, p: str) -> bool: ...

    def relpath(self, path: str, start: str | None = None) -> str: ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Failures are reported by raising ``OSError`` (or a subclass) with
    ``errno`` set, the same way the ``os`` module does.
    """

    def stat(self, path: str) -> EntryStat:
        """Stat a path, following symlinks.

        Args:
            path: Path to stat.

        Returns:
            Stat result with device and inode identity.

        Raises:
            FileNotFoundError: If path does not exist.
        """
        ...

    def lstat(self, path: str) -> EntryStat:
        """Stat a path without following a final symlink.

        Args:
            path: Path to stat.

        Returns:
            Stat result describing the entry itself.
        """
        ...

    def readdir(self, path: str) -> list[DirEntry]:
        """List a directory.

        Args:
            path: Directory to list.

        Returns:
            Typed entries, excluding ``.`` and ``..``.

        Raises:
            FileNotFoundError: If path does not exist.
            NotADirectoryError: If path is not a directory.
        """
        ...

    def readlink(self, path: str) -> str:
        """Return the target text of a symlink.

        Raises:
            OSError: ``EINVAL`` if path is not a symlink.
        """
        ...

    def symlink(self, target: str, path: str) -> None:
        """Create a symlink at ``path`` pointing to ``target``."""
        ...

    def unlink(self, path: str) -> None:
        """Remove a non-directory entry."""
        ...

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        ...

    def mkdir(self, path: str, mode: int | None = None, parents: bool = False) -> None:
        """Create a directory.

        Args:
            path: Directory to create.
            mode: Permission bits, or None for the platform default.
            parents: Create missing ancestors and tolerate an existing
                directory at ``path``.
        """
        ...

    def rename(self, src: str, dest: str) -> None:
        """Atomically rename ``src`` to ``dest``.

        Raises:
            OSError: ``EXDEV`` when src and dest are on different devices.
        """
        ...

    def copy_file(self, src: str, dest: str) -> None:
        """Copy file content from ``src`` to ``dest``."""
        ...

    def chmod(self, path: str, mode: int) -> None:
        """Set permission bits."""
        ...

    def utimes(self, path: str, atime_ns: int, mtime_ns: int) -> None:
        """Set access and modification times (nanoseconds)."""
        ...

    def write_file(self, path: str, data: str | bytes, mode: int | None = None) -> None:
        """Create or truncate a file and write ``data``.

        Text is written as UTF-8.
        """
        ...


@runtime_checkable
class SupportsRemoveTree(Protocol):
    """Optional capability: remove recursively, tolerating absence."""

    def rm(self, path: str) -> None:
        """Remove ``path`` and everything under it; no-op if absent."""
        ...
