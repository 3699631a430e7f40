"""Move with atomic rename and a copy-then-remove fallback across devices."""

from __future__ import annotations

import errno
import logging

from fsops.copy import Copier
from fsops.errors import ConflictError, InvalidOperationError
from fsops.identity import are_identical, check_parent_paths, is_root, is_subdirectory
from fsops.options import CopyOptions, MoveOptions
from fsops.protocols import FileSystem, PathModule
from fsops.remove import remove
from fsops.types import EntryStat

logger = logging.getLogger(__name__)

OPERATION = "move"


class Mover:
    """Moves one source path to one destination path."""

    def __init__(self, fs: FileSystem, pathmod: PathModule, options: MoveOptions) -> None:
        """Initialize mover.

        Args:
            fs: Filesystem backend.
            pathmod: Path module for resolving and splitting.
            options: Complete move options.
        """
        self.fs = fs
        self.pathmod = pathmod
        self.options = options

    def run(self, src: str, dest: str) -> None:
        """Move ``src`` to ``dest``.

        A rename is tried first. When it fails with ``EXDEV`` the tree is
        copied and the source removed afterwards. If that removal fails,
        both copies stay on disk and the error propagates.

        Raises:
            InvalidOperationError: Self move, move into own subtree, or a
                file/directory mismatch.
            ConflictError: ``dest`` exists and ``overwrite`` is off.
            OSError: Propagated from the backend.
        """
        logger.debug("Moving %s to %s with %s", src, dest, self.options)
        src_stat, is_changing_case = self._check_paths(src, dest)
        check_parent_paths(self.fs, self.pathmod, OPERATION, src, src_stat, dest)

        parent = self.pathmod.dirname(self.pathmod.abspath(dest))
        if not is_root(self.pathmod, parent):
            self.fs.mkdir(parent, parents=True)

        self._do_rename(src, dest, is_changing_case)

    def _check_paths(self, src: str, dest: str) -> tuple[EntryStat, bool]:
        src_stat = self.fs.stat(src)
        try:
            dest_stat: EntryStat | None = self.fs.stat(dest)
        except FileNotFoundError:
            dest_stat = None

        if dest_stat is not None:
            if are_identical(src_stat, dest_stat):
                if self._is_changing_case(src, dest):
                    logger.debug("Case-only rename of %s to %s", src, dest)
                    return src_stat, True
                raise InvalidOperationError(
                    OPERATION, f"src and dest must not be the same: '{src}'", src, dest
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
                f"cannot move '{src}' to a subdirectory of itself '{dest}'",
                src,
                dest,
            )
        return src_stat, False

    def _is_changing_case(self, src: str, dest: str) -> bool:
        src_name = self.pathmod.basename(src)
        dest_name = self.pathmod.basename(dest)
        return src_name != dest_name and src_name.lower() == dest_name.lower()

    def _do_rename(self, src: str, dest: str, is_changing_case: bool) -> None:
        if is_changing_case:
            self._rename(src, dest)
            return
        if self.options.overwrite:
            remove(self.fs, self.pathmod, dest)
        elif self._exists(dest):
            raise ConflictError(OPERATION, f"dest already exists: '{dest}'", dest, src)
        self._rename(src, dest)

    def _exists(self, path: str) -> bool:
        try:
            self.fs.stat(path)
        except FileNotFoundError:
            return False
        return True

    def _rename(self, src: str, dest: str) -> None:
        try:
            self.fs.rename(src, dest)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            logger.debug("Rename of %s crosses devices, copying instead", src)
            self._move_across_device(src, dest)

    def _move_across_device(self, src: str, dest: str) -> None:
        options = CopyOptions(force=self.options.overwrite, error_on_exist=True)
        Copier(self.fs, self.pathmod, options).run(src, dest)
        try:
            remove(self.fs, self.pathmod, src)
        except OSError:
            logger.warning(
                "Copied %s to %s but could not remove the source; both now exist", src, dest
            )
            raise


def move(
    fs: FileSystem,
    pathmod: PathModule,
    src: str,
    dest: str,
    options: MoveOptions,
) -> None:
    """Move a file or directory tree from ``src`` to ``dest``."""
    Mover(fs, pathmod, options).run(src, dest)
