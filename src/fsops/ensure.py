"""Idempotent directory and file creation."""

from __future__ import annotations

import errno
import logging

from fsops.errors import WrongTypeError
from fsops.options import EnsureDirOptions, EnsureFileOptions
from fsops.protocols import FileSystem, PathModule

logger = logging.getLogger(__name__)


def ensure_dir(fs: FileSystem, target: str, options: EnsureDirOptions) -> None:
    """Create ``target`` and any missing ancestors.

    Succeeds silently if the directory already exists.

    Raises:
        FileExistsError: If a non-directory occupies ``target``.
    """
    fs.mkdir(target, mode=options.mode, parents=True)


def ensure_file(
    fs: FileSystem,
    pathmod: PathModule,
    target: str,
    options: EnsureFileOptions,
) -> None:
    """Make sure ``target`` exists as a regular file.

    An absent file is created empty, along with its parent directories.

    Args:
        fs: Filesystem backend.
        pathmod: Path module used to find the parent directory.
        target: File path.
        options: Modes for newly created files and directories.

    Raises:
        WrongTypeError: If ``target`` exists and is not a file, or its
            parent exists and is not a directory.
    """
    try:
        stats = fs.stat(target)
    except (FileNotFoundError, NotADirectoryError):
        stats = None

    if stats is not None:
        if stats.is_file():
            return
        raise WrongTypeError(
            "ensure_file",
            f"'{target}' already exists and is not a file",
            target,
            code=errno.errorcode[errno.EISDIR] if stats.is_dir() else None,
        )

    parent = pathmod.dirname(pathmod.abspath(target))
    try:
        parent_stats = fs.stat(parent)
    except FileNotFoundError:
        logger.debug("Creating missing parent directory %s", parent)
        ensure_dir(fs, parent, EnsureDirOptions(mode=options.dir_mode))
    else:
        if not parent_stats.is_dir():
            raise WrongTypeError(
                "ensure_file",
                f"'{parent}' already exists and is not a directory",
                parent,
                target,
            )

    fs.write_file(target, "", mode=options.file_mode)
