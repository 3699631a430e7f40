"""Application context for dependency injection.

This module separates object creation from object use, enabling the CLI
to run against an injected filesystem backend in tests.
"""

from __future__ import annotations

from dataclasses import dataclass

from fsops.ops import FileOps
from fsops.protocols import FileSystem, PathModule


@dataclass
class OpsContext:
    """Container for CLI dependencies.

    Tests construct it directly with a FileOps bound to a test double.
    """

    ops: FileOps


def create_context(
    filesystem: FileSystem | None = None,
    pathmod: PathModule | None = None,
) -> OpsContext:
    """Factory for CLI dependencies.

    Args:
        filesystem: Override the filesystem backend.
        pathmod: Override the path module.

    Returns:
        Configured OpsContext.
    """
    return OpsContext(ops=FileOps.create(filesystem=filesystem, pathmod=pathmod))
