"""Safe copy, move, remove and ensure operations over an injectable filesystem."""

__version__ = "0.1.0"

from fsops.errors import (
    ConflictError,
    FsOpsError,
    InvalidOperationError,
    UnsupportedEntryError,
    WrongTypeError,
)
from fsops.filesystem import RealFileSystem
from fsops.ops import FileOps
from fsops.options import CopyOptions, EnsureDirOptions, EnsureFileOptions, MoveOptions

# Export protocol interfaces for type hints and dependency injection
from fsops.protocols import FileSystem, PathModule, SupportsRemoveTree

__all__ = [
    "__version__",
    "ConflictError",
    "CopyOptions",
    "EnsureDirOptions",
    "EnsureFileOptions",
    "FileOps",
    "FileSystem",
    "FsOpsError",
    "InvalidOperationError",
    "MoveOptions",
    "PathModule",
    "RealFileSystem",
    "SupportsRemoveTree",
    "UnsupportedEntryError",
    "WrongTypeError",
]
