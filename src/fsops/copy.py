"""Recursive copy of files, directory trees and symlinks."""

from __future__ import annotations

import asyncio
import errno
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fsops.errors import (
    ConflictError,
    InvalidOperationError,
    UnsupportedEntryError,
)
from fsops.identity import are_identical, check_parent_paths, is_subdirectory
from fsops.options import CopyOptions
from fsops.protocols import FileSystem, PathModule
from fsops.types import EntryStat

logger = logging.getLogger(__name__)

OPERATION = "copy"

# Windows reports ERROR_NOT_A_REPARSE_POINT when readlink hits a regular entry.
_WINERROR_NOT_A_REPARSE_POINT = 4390

_OWNER_WRITE = 0o200


def _is_not_a_link_error(e: OSError) -> bool:
    return e.errno == errno.EINVAL or getattr(e, "winerror", None) == _WINERROR_NOT_A_REPARSE_POINT


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def _resolve_awaitable(awaitable: Awaitable[Any]) -> Any:
    """Run an async filter result to completion.

    Raises:
        TypeError: If called from inside a running event loop, where the
            result cannot be awaited synchronously.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_await(awaitable))
    if inspect.iscoroutine(awaitable):
        awaitable.close()
    raise TypeError("async copy filters cannot be used from inside a running event loop")


class Copier:
    """Copies one source path onto one destination path.

    Follows Separate Use from Creation: one instance per top-level call,
    holding the backend and the already-defaulted options that every
    recursive step shares.
    """

    def __init__(self, fs: FileSystem, pathmod: PathModule, options: CopyOptions) -> None:
        """Initialize copier.

        Args:
            fs: Filesystem backend.
            pathmod: Path module for joining and resolving.
            options: Complete copy options.
        """
        self.fs = fs
        self.pathmod = pathmod
        self.options = options
        self._stat: Callable[[str], EntryStat] = fs.stat if options.dereference else fs.lstat

    def run(self, src: str, dest: str) -> None:
        """Copy ``src`` to ``dest``.

        Validation happens before anything is written. A failure part way
        through a tree leaves already copied entries in place.

        Raises:
            InvalidOperationError: Self copy, copy into own subtree, or a
                file/directory mismatch.
            ConflictError: Destination exists with ``force`` off and
                ``error_on_exist`` on.
            UnsupportedEntryError: Source is a socket, FIFO or unknown type.
            OSError: Propagated from the backend.
        """
        logger.debug("Copying %s to %s with %s", src, dest, self.options)
        src_stat, dest_stat = self._check_paths(src, dest)
        check_parent_paths(self.fs, self.pathmod, OPERATION, src, src_stat, dest)
        if not self._include(src, dest):
            logger.debug("Filter excluded %s", src)
            return
        self._ensure_parent(dest)
        self._copy_entry(dest_stat, src, dest)

    def _check_paths(self, src: str, dest: str) -> tuple[EntryStat, EntryStat | None]:
        src_stat = self._stat(src)
        try:
            dest_stat: EntryStat | None = self._stat(dest)
        except FileNotFoundError:
            dest_stat = None

        if dest_stat is not None:
            if are_identical(src_stat, dest_stat):
                raise InvalidOperationError(
                    OPERATION, f"src and dest cannot be the same: '{src}'", src, dest
                )
            if src_stat.is_dir() and not dest_stat.is_dir():
                raise InvalidOperationError(
                    OPERATION,
                    f"cannot overwrite non-directory '{dest}' with directory '{src}'",
                    src,
                    dest,
                )
            if not src_stat.is_dir() and dest_stat.is_dir():
                raise InvalidOperationError(
                    OPERATION,
                    f"cannot overwrite directory '{dest}' with non-directory '{src}'",
                    src,
                    dest,
                )

        if src_stat.is_dir() and is_subdirectory(self.pathmod, src, dest):
            raise InvalidOperationError(
                OPERATION,
                f"cannot copy '{src}' to a subdirectory of itself '{dest}'",
                src,
                dest,
            )
        return src_stat, dest_stat

    def _include(self, src: str, dest: str) -> bool:
        if self.options.filter is None:
            return True
        result = self.options.filter(src, dest)
        if inspect.isawaitable(result):
            result = _resolve_awaitable(result)
        return bool(result)

    def _ensure_parent(self, dest: str) -> None:
        parent = self.pathmod.dirname(self.pathmod.abspath(dest))
        try:
            self.fs.stat(parent)
        except FileNotFoundError:
            self.fs.mkdir(parent, parents=True)

    def _copy_entry(self, dest_stat: EntryStat | None, src: str, dest: str) -> None:
        src_stat = self._stat(src)
        if src_stat.is_dir():
            if not self.options.recursive:
                raise InvalidOperationError(
                    OPERATION, f"'{src}' is a directory (not copied)", src, code="EISDIR"
                )
            self._on_dir(src_stat, dest_stat, src, dest)
        elif src_stat.is_file() or src_stat.is_char_device() or src_stat.is_block_device():
            self._on_file(src_stat, dest_stat, src, dest)
        elif src_stat.is_symlink():
            self._on_link(dest_stat, src, dest)
        elif src_stat.is_socket():
            raise UnsupportedEntryError(OPERATION, f"cannot copy a socket file: '{src}'", src, dest)
        elif src_stat.is_fifo():
            raise UnsupportedEntryError(OPERATION, f"cannot copy a FIFO pipe: '{src}'", src, dest)
        else:
            raise UnsupportedEntryError(
                OPERATION, f"cannot copy an unknown file type: '{src}'", src, dest
            )

    # -- directories ---------------------------------------------------------

    def _on_dir(
        self, src_stat: EntryStat, dest_stat: EntryStat | None, src: str, dest: str
    ) -> None:
        if dest_stat is not None:
            self._copy_dir(src, dest)
            return
        self.fs.mkdir(dest)
        self._copy_dir(src, dest)
        self.fs.chmod(dest, src_stat.permissions)

    def _copy_dir(self, src: str, dest: str) -> None:
        for entry in self.fs.readdir(src):
            src_item = self.pathmod.join(src, entry.name)
            dest_item = self.pathmod.join(dest, entry.name)
            _, dest_stat = self._check_paths(src_item, dest_item)
            if self._include(src_item, dest_item):
                self._copy_entry(dest_stat, src_item, dest_item)

    # -- files ---------------------------------------------------------------

    def _on_file(
        self, src_stat: EntryStat, dest_stat: EntryStat | None, src: str, dest: str
    ) -> None:
        if dest_stat is None:
            self._copy_file(src_stat, src, dest)
        elif self.options.force:
            self.fs.unlink(dest)
            self._copy_file(src_stat, src, dest)
        elif self.options.error_on_exist:
            raise ConflictError(OPERATION, f"'{dest}' already exists", dest, src)
        else:
            logger.debug("Skipping existing %s", dest)

    def _copy_file(self, src_stat: EntryStat, src: str, dest: str) -> None:
        self.fs.copy_file(src, dest)
        mode = src_stat.permissions
        if not self.options.preserve_timestamps:
            self.fs.chmod(dest, mode)
            return
        # utimes needs a writable file on some platforms.
        if not mode & _OWNER_WRITE:
            self.fs.chmod(dest, mode | _OWNER_WRITE)
        # Reading the source during the copy changed its atime, so stat again.
        fresh = self.fs.stat(src)
        self.fs.utimes(dest, fresh.atime_ns, fresh.mtime_ns)
        self.fs.chmod(dest, mode)

    # -- symlinks ------------------------------------------------------------

    def _resolve_link(self, link: str, target: str) -> str:
        if self.pathmod.isabs(target):
            return target
        return self.pathmod.abspath(self.pathmod.join(self.pathmod.dirname(link), target))

    def _on_link(self, dest_stat: EntryStat | None, src: str, dest: str) -> None:
        link_text = self.fs.readlink(src)
        resolved_src = link_text
        if not self.options.verbatim_symlinks:
            resolved_src = self._resolve_link(src, link_text)

        if dest_stat is None:
            self.fs.symlink(link_text, dest)
            return

        try:
            dest_text = self.fs.readlink(dest)
        except OSError as e:
            if not _is_not_a_link_error(e):
                raise
            # Not a symlink: let symlink creation decide about the collision.
            self.fs.symlink(link_text, dest)
            return

        resolved_dest = self._resolve_link(dest, dest_text)
        if is_subdirectory(self.pathmod, resolved_src, resolved_dest):
            raise InvalidOperationError(
                OPERATION,
                f"cannot copy '{resolved_src}' to a subdirectory of itself '{resolved_dest}'",
                src,
                dest,
            )
        # Unlinking dest would break src when src lives under dest's target.
        if self.fs.stat(src).is_dir() and is_subdirectory(
            self.pathmod, resolved_dest, resolved_src
        ):
            raise InvalidOperationError(
                OPERATION,
                f"cannot overwrite '{resolved_dest}' with '{resolved_src}'",
                src,
                dest,
            )
        self.fs.unlink(dest)
        self.fs.symlink(link_text, dest)


def copy(
    fs: FileSystem,
    pathmod: PathModule,
    src: str,
    dest: str,
    options: CopyOptions,
) -> None:
    """Copy a file, symlink or directory tree from ``src`` to ``dest``."""
    Copier(fs, pathmod, options).run(src, dest)
