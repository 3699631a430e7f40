"""Shared data types for fsops."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass

__all__ = ["DirEntry", "EntryKind", "EntryStat"]


class EntryKind:
    """Entry kind names reported by ``FileSystem.readdir``."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True)
class EntryStat:
    """Result of a stat or lstat call.

    Attributes:
        mode: Raw ``st_mode`` bits (type and permissions).
        ino: Inode number. Python ints never lose precision.
        dev: Device number.
        atime_ns: Access time in nanoseconds.
        mtime_ns: Modification time in nanoseconds.
    """

    mode: int
    ino: int | None
    dev: int | None
    atime_ns: int = 0
    mtime_ns: int = 0

    @classmethod
    def from_os(cls, result: os.stat_result) -> EntryStat:
        """Build an EntryStat from an ``os.stat_result``."""
        return cls(
            mode=result.st_mode,
            ino=result.st_ino,
            dev=result.st_dev,
            atime_ns=result.st_atime_ns,
            mtime_ns=result.st_mtime_ns,
        )

    @property
    def permissions(self) -> int:
        """Permission bits without the file type."""
        return stat.S_IMODE(self.mode)

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    def is_char_device(self) -> bool:
        return stat.S_ISCHR(self.mode)

    def is_block_device(self) -> bool:
        return stat.S_ISBLK(self.mode)

    def is_socket(self) -> bool:
        return stat.S_ISSOCK(self.mode)

    def is_fifo(self) -> bool:
        return stat.S_ISFIFO(self.mode)


@dataclass(frozen=True)
class DirEntry:
    """A typed directory listing entry.

    Attributes:
        name: Entry name relative to the listed directory.
        kind: One of the ``EntryKind`` values.
    """

    name: str
    kind: str

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name:
            raise ValueError("name cannot be empty")
