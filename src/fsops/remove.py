"""Remove a file or a whole directory tree."""

from __future__ import annotations

import logging

from fsops.protocols import FileSystem, PathModule

logger = logging.getLogger(__name__)


def remove(fs: FileSystem, pathmod: PathModule, target: str) -> None:
    """Remove ``target`` recursively; a missing target is not an error.

    Uses the backend's ``rm`` primitive when it has one, otherwise walks
    the tree with lstat/readdir/unlink/rmdir.

    Args:
        fs: Filesystem backend.
        pathmod: Path module used to join child names.
        target: File, symlink or directory to remove.

    Raises:
        OSError: For failures other than the target being absent.
    """
    rm = getattr(fs, "rm", None)
    if callable(rm):
        rm(target)
        return

    logger.debug("Backend has no rm primitive, removing %s manually", target)
    _remove_tree(fs, pathmod, target)


def _remove_tree(fs: FileSystem, pathmod: PathModule, target: str) -> None:
    try:
        stats = fs.lstat(target)
    except FileNotFoundError:
        return

    try:
        if stats.is_dir():
            for entry in fs.readdir(target):
                _remove_tree(fs, pathmod, pathmod.join(target, entry.name))
            fs.rmdir(target)
        else:
            fs.unlink(target)
    except FileNotFoundError:
        # Removed concurrently.
        return
