"""Shared test fixtures."""

from __future__ import annotations

import errno
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fsops.filesystem import RealFileSystem
from fsops.ops import FileOps


# ============================================================================
# Filesystem Test Doubles
# ============================================================================


class CrossDeviceFileSystem(RealFileSystem):
    """Real filesystem whose rename always fails with EXDEV."""

    def __init__(self) -> None:
        self.rename_calls: list[tuple[str, str]] = []

    def rename(self, src: str, dest: str) -> None:
        self.rename_calls.append((src, dest))
        raise OSError(errno.EXDEV, "Invalid cross-device link", src)


class FailingRenameFileSystem(RealFileSystem):
    """Real filesystem whose rename fails with a non-EXDEV error."""

    def __init__(self) -> None:
        self.copy_calls: list[tuple[str, str]] = []

    def rename(self, src: str, dest: str) -> None:
        raise PermissionError(errno.EACCES, "Permission denied", src)

    def copy_file(self, src: str, dest: str) -> None:
        self.copy_calls.append((src, dest))
        super().copy_file(src, dest)


class NoRemoveTreeFileSystem(RealFileSystem):
    """Real filesystem without the combined rm primitive."""

    rm = None


@pytest.fixture
def real_fs() -> RealFileSystem:
    """Production filesystem backend."""
    return RealFileSystem()


@pytest.fixture
def ops() -> FileOps:
    """FileOps bound to the real filesystem and os.path."""
    return FileOps.create()


@pytest.fixture
def cross_device_fs() -> CrossDeviceFileSystem:
    """Filesystem that forces the copy fallback on every rename."""
    return CrossDeviceFileSystem()


@pytest.fixture
def failing_rename_fs() -> FailingRenameFileSystem:
    """Filesystem whose rename fails with EACCES."""
    return FailingRenameFileSystem()


@pytest.fixture
def no_rm_fs() -> NoRemoveTreeFileSystem:
    """Filesystem lacking the rm primitive."""
    return NoRemoveTreeFileSystem()


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.stat.side_effect = FileNotFoundError(errno.ENOENT, "No such file or directory")
    fs.readdir.return_value = []
    return fs


# ============================================================================
# Sample Tree Fixtures
# ============================================================================


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a source tree with nested files, an empty dir and a symlink.

    Layout::

        src/
            a.txt            "alpha"
            empty/
            sub/
                b.txt        "bravo"
                deeper/
                    c.bin    b"\\x00\\x01charlie"
            link -> a.txt
    """
    root = tmp_path / "src"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_text("alpha")
    (root / "sub" / "b.txt").write_text("bravo")
    (root / "sub" / "deeper" / "c.bin").write_bytes(b"\x00\x01charlie")
    os.symlink("a.txt", root / "link")
    return root


def snapshot(root: Path) -> dict[str, bytes | str | None]:
    """Map each relative path under root to file bytes, link text or None (dir)."""
    result: dict[str, bytes | str | None] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            full = Path(dirpath) / name
            rel = full.relative_to(root).as_posix()
            if full.is_symlink():
                result[rel] = os.readlink(full)
            elif full.is_dir():
                result[rel] = None
            else:
                result[rel] = full.read_bytes()
    return result


@pytest.fixture
def tree_snapshot():
    """Return the snapshot helper."""
    return snapshot


@pytest.fixture
def umask_022():
    """Run the test with a umask of 022 so requested modes are predictable."""
    previous = os.umask(0o022)
    yield
    os.umask(previous)
