"""Error taxonomy for fsops operations.

Validation and policy failures raise an ``FsOpsError`` subclass carrying
the operation name and the paths involved. Failures coming from the
filesystem backend itself propagate as plain ``OSError`` subclasses.
"""

from __future__ import annotations

import errno

__all__ = [
    "ConflictError",
    "FsOpsError",
    "InvalidOperationError",
    "UnsupportedEntryError",
    "WrongTypeError",
]


class FsOpsError(Exception):
    """Error during a filesystem operation.

    Attributes:
        operation: Name of the public operation that failed (e.g. ``copy``).
        paths: Paths involved, most relevant first.
        code: Symbolic errno name (e.g. ``EEXIST``) when one applies.
    """

    default_errno: int | None = None

    def __init__(
        self,
        operation: str,
        message: str,
        *paths: str,
        code: str | None = None,
    ) -> None:
        self.operation = operation
        self.paths = tuple(str(p) for p in paths)
        if code is None and self.default_errno is not None:
            code = errno.errorcode.get(self.default_errno)
        self.code = code
        self.message = message
        super().__init__(f"{operation}(): {message}")


class InvalidOperationError(FsOpsError):
    """Self copy or move, copy into own subtree, or file/directory mismatch."""

    default_errno = errno.EINVAL


class ConflictError(FsOpsError):
    """Destination already exists and the policy forbids replacing it."""

    default_errno = errno.EEXIST


class UnsupportedEntryError(FsOpsError):
    """Source entry is a socket, FIFO or of an unknown type."""

    default_errno = errno.ENOTSUP if hasattr(errno, "ENOTSUP") else None


class WrongTypeError(FsOpsError):
    """An existing entry has the wrong type for the requested state."""

    default_errno = errno.ENOTDIR
