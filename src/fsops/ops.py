"""High-level filesystem operations bound to one backend."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from typing import Any, Union

import fsops.copy as copy_module
import fsops.empty_dir as empty_dir_module
import fsops.ensure as ensure_module
import fsops.move as move_module
import fsops.remove as remove_module
from fsops.filesystem import RealFileSystem
from fsops.options import (
    CopyOptions,
    EnsureDirOptions,
    EnsureFileOptions,
    MoveOptions,
    coerce_options,
)
from fsops.protocols import FileSystem, PathModule

logger = logging.getLogger(__name__)

StrPath = Union[str, os.PathLike]


class FileOps:
    """Copy, move, remove and ensure operations over an injected filesystem.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    """

    def __init__(self, filesystem: FileSystem, pathmod: PathModule) -> None:
        """Initialize operations with required dependencies.

        Args:
            filesystem: Filesystem backend (required).
            pathmod: Path module matching the backend's path flavour (required).
        """
        self.fs = filesystem
        self.pathmod = pathmod

    @classmethod
    def create(
        cls,
        filesystem: FileSystem | None = None,
        pathmod: PathModule | None = None,
    ) -> FileOps:
        """Factory method for production instantiation.

        Args:
            filesystem: Optional backend (RealFileSystem if not provided).
            pathmod: Optional path module (``os.path`` if not provided).

        Returns:
            Configured FileOps instance.
        """
        return cls(
            filesystem=filesystem or RealFileSystem(),
            pathmod=pathmod or os.path,
        )

    def copy(
        self,
        src: StrPath,
        dest: StrPath,
        options: CopyOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        """Copy a file, symlink or directory tree.

        Args:
            src: Source path.
            dest: Destination path (the copy itself, not its parent).
            options: Copy options as a model or mapping.
            **overrides: Individual option fields, e.g. ``force=False``.
        """
        opts = coerce_options(CopyOptions, options, **overrides)
        copy_module.copy(self.fs, self.pathmod, os.fspath(src), os.fspath(dest), opts)

    def move(
        self,
        src: StrPath,
        dest: StrPath,
        options: MoveOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        """Move a file or directory tree.

        Args:
            src: Source path.
            dest: Destination path.
            options: Move options as a model or mapping.
            **overrides: Individual option fields, e.g. ``overwrite=True``.
        """
        opts = coerce_options(MoveOptions, options, **overrides)
        move_module.move(self.fs, self.pathmod, os.fspath(src), os.fspath(dest), opts)

    def remove(self, target: StrPath) -> None:
        """Remove a file or directory tree; a missing target is fine."""
        remove_module.remove(self.fs, self.pathmod, os.fspath(target))

    def empty_dir(self, target: StrPath) -> None:
        """Make ``target`` an existing, empty directory."""
        empty_dir_module.empty_dir(self.fs, self.pathmod, os.fspath(target))

    def ensure_dir(
        self,
        target: StrPath,
        options: EnsureDirOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        """Create a directory and its ancestors if missing."""
        opts = coerce_options(EnsureDirOptions, options, **overrides)
        ensure_module.ensure_dir(self.fs, os.fspath(target), opts)

    def ensure_file(
        self,
        target: StrPath,
        options: EnsureFileOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        """Create an empty file (and its parents) if missing."""
        opts = coerce_options(EnsureFileOptions, options, **overrides)
        ensure_module.ensure_file(self.fs, self.pathmod, os.fspath(target), opts)

    def copy_to_dir(
        self,
        srcs: Iterable[StrPath],
        dest_dir: StrPath,
        options: CopyOptions | Mapping[str, Any] | None = None,
        base: StrPath | None = None,
        **overrides: Any,
    ) -> list[str]:
        """Copy several paths into a directory.

        Args:
            srcs: Paths to copy.
            dest_dir: Directory receiving the copies.
            options: Copy options shared by every copy.
            base: When given, each source keeps its path relative to
                ``base`` under ``dest_dir``; otherwise only its name.
            **overrides: Individual option fields.

        Returns:
            Destination path of each source, in input order.
        """
        opts = coerce_options(CopyOptions, options, **overrides)
        targets = []
        for src, dest in self._pair_with_dir(srcs, dest_dir, base):
            copy_module.copy(self.fs, self.pathmod, src, dest, opts)
            targets.append(dest)
        return targets

    def move_to_dir(
        self,
        srcs: Iterable[StrPath],
        dest_dir: StrPath,
        options: MoveOptions | Mapping[str, Any] | None = None,
        base: StrPath | None = None,
        **overrides: Any,
    ) -> list[str]:
        """Move several paths into a directory.

        Same destination rules as `copy_to_dir`.

        Returns:
            Destination path of each source, in input order.
        """
        opts = coerce_options(MoveOptions, options, **overrides)
        targets = []
        for src, dest in self._pair_with_dir(srcs, dest_dir, base):
            move_module.move(self.fs, self.pathmod, src, dest, opts)
            targets.append(dest)
        return targets

    def _pair_with_dir(
        self,
        srcs: Iterable[StrPath],
        dest_dir: StrPath,
        base: StrPath | None,
    ) -> list[tuple[str, str]]:
        dest_dir = os.fspath(dest_dir)
        pairs = []
        for src in map(os.fspath, srcs):
            if base is not None:
                rel = self.pathmod.relpath(
                    self.pathmod.abspath(src), self.pathmod.abspath(os.fspath(base))
                )
            else:
                rel = self.pathmod.basename(self.pathmod.abspath(src))
            pairs.append((src, self.pathmod.join(dest_dir, rel)))
        return pairs

    def path_exists(self, target: StrPath) -> bool:
        """Check whether ``target`` exists (following symlinks)."""
        try:
            self.fs.stat(os.fspath(target))
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def is_empty_dir(self, target: StrPath, follow_links: bool = True) -> bool:
        """Check whether ``target`` is a directory with no entries.

        Args:
            target: Path to check.
            follow_links: Follow a symlink at ``target``.

        Returns:
            False for missing paths and non-directories.
        """
        target = os.fspath(target)
        stat_fn = self.fs.stat if follow_links else self.fs.lstat
        try:
            if not stat_fn(target).is_dir():
                return False
            return not self.fs.readdir(target)
        except (FileNotFoundError, NotADirectoryError):
            return False

    def output_file(
        self,
        target: StrPath,
        data: str | bytes,
        mode: int | None = None,
    ) -> None:
        """Write ``data`` to ``target``, creating parent directories first.

        Text is written as UTF-8.
        """
        target = os.fspath(target)
        parent = self.pathmod.dirname(self.pathmod.abspath(target))
        ensure_module.ensure_dir(self.fs, parent, EnsureDirOptions())
        self.fs.write_file(target, data, mode=mode)
