"""Entry identity and subdirectory checks shared by copy and move."""

from __future__ import annotations

import logging

from fsops.errors import InvalidOperationError
from fsops.protocols import FileSystem, PathModule
from fsops.types import EntryStat

logger = logging.getLogger(__name__)


def are_identical(a: EntryStat, b: EntryStat) -> bool:
    """Return True if both stats describe the same entry (device and inode)."""
    return (
        a.ino is not None
        and a.dev is not None
        and b.ino is not None
        and b.dev is not None
        and a.ino == b.ino
        and a.dev == b.dev
    )


def _segments(pathmod: PathModule, path: str) -> list[str]:
    return [part for part in pathmod.abspath(path).split(pathmod.sep) if part]


def is_subdirectory(pathmod: PathModule, maybe_parent: str, maybe_child: str) -> bool:
    """Check whether ``maybe_child`` lies lexically inside ``maybe_parent``.

    Both paths are made absolute and compared segment by segment. Symlinks
    are not resolved. A path counts as a subdirectory of itself.

    Args:
        pathmod: Path module used to resolve and split.
        maybe_parent: Candidate ancestor.
        maybe_child: Candidate descendant.

    Returns:
        True if every segment of ``maybe_parent`` matches the segment at the
        same position in ``maybe_child``.
    """
    parent_parts = _segments(pathmod, maybe_parent)
    child_parts = _segments(pathmod, maybe_child)
    if len(parent_parts) > len(child_parts):
        return False
    return all(part == child_parts[i] for i, part in enumerate(parent_parts))


def is_root(pathmod: PathModule, path: str) -> bool:
    """Return True if ``path`` is a filesystem root (its own parent)."""
    return pathmod.dirname(path) == path


def check_parent_paths(
    fs: FileSystem,
    pathmod: PathModule,
    operation: str,
    src: str,
    src_stat: EntryStat,
    dest: str,
) -> None:
    """Reject ``dest`` when any of its existing ancestors is ``src``.

    Walks from the parent of ``dest`` towards the root, comparing each
    existing ancestor with ``src`` by identity, so nesting through symlinks
    is caught too. The walk stops at the root or at the parent of ``src``.

    Raises:
        InvalidOperationError: If an ancestor of ``dest`` is ``src``.
    """
    src_parent = pathmod.abspath(pathmod.dirname(src))
    current = dest
    while True:
        dest_parent = pathmod.abspath(pathmod.dirname(current))
        if dest_parent == src_parent or is_root(pathmod, dest_parent):
            return
        try:
            parent_stat = fs.stat(dest_parent)
        except FileNotFoundError:
            return
        if are_identical(src_stat, parent_stat):
            logger.debug("%s: ancestor %s of %s is the source", operation, dest_parent, dest)
            raise InvalidOperationError(
                operation,
                f"cannot {operation} '{src}' to a subdirectory of itself '{dest}'",
                src,
                dest,
            )
        current = dest_parent
