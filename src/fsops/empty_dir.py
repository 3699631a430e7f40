"""Make a directory exist and be empty."""

from __future__ import annotations

import logging

from fsops.ensure import ensure_dir
from fsops.options import EnsureDirOptions
from fsops.protocols import FileSystem, PathModule
from fsops.remove import remove

logger = logging.getLogger(__name__)


def empty_dir(fs: FileSystem, pathmod: PathModule, target: str) -> None:
    """Remove everything inside ``target``, creating it if it is absent.

    Entries are independent of each other and removed one by one.
    """
    try:
        entries = fs.readdir(target)
    except FileNotFoundError:
        logger.debug("%s does not exist, creating it", target)
        ensure_dir(fs, target, EnsureDirOptions())
        return

    for entry in entries:
        remove(fs, pathmod, pathmod.join(target, entry.name))
