"""Tests for ensure_dir and ensure_file."""

from __future__ import annotations

from pathlib import Path

import pytest

from fsops.errors import FsOpsError, WrongTypeError
from fsops.ops import FileOps


class TestEnsureDir:
    """Tests for ensure_dir."""

    def test_creates_nested_directories(self, ops: FileOps, tmp_path: Path) -> None:
        """Test missing ancestors are created."""
        target = tmp_path / "a" / "b" / "c"

        ops.ensure_dir(target)

        assert target.is_dir()

    def test_idempotent(self, ops: FileOps, tmp_path: Path) -> None:
        """Test a second call on an existing directory succeeds."""
        target = tmp_path / "dir"

        ops.ensure_dir(target)
        (target / "keep.txt").write_text("kept")
        ops.ensure_dir(target)

        assert (target / "keep.txt").read_text() == "kept"

    def test_mode_applied(self, ops: FileOps, tmp_path: Path, umask_022) -> None:
        """Test the requested mode is used for every new directory."""
        target = tmp_path / "a" / "b" / "private"

        ops.ensure_dir(target, mode="700")

        for created in (tmp_path / "a", tmp_path / "a" / "b", target):
            assert created.stat().st_mode & 0o777 == 0o700

    def test_file_in_the_way(self, ops: FileOps, tmp_path: Path) -> None:
        """Test a file occupying the path is an error."""
        target = tmp_path / "occupied"
        target.write_text("x")

        with pytest.raises(FileExistsError):
            ops.ensure_dir(target)


class TestEnsureFile:
    """Tests for ensure_file."""

    def test_existing_file_untouched(self, ops: FileOps, tmp_path: Path) -> None:
        """Test an existing file keeps its content."""
        target = tmp_path / "file.txt"
        target.write_text("content")

        ops.ensure_file(target)

        assert target.read_text() == "content"

    def test_creates_file_in_existing_dir(self, ops: FileOps, tmp_path: Path) -> None:
        """Test an absent file is created empty."""
        target = tmp_path / "new.txt"

        ops.ensure_file(target)

        assert target.is_file()
        assert target.read_bytes() == b""

    def test_creates_missing_parents(self, ops: FileOps, tmp_path: Path, umask_022) -> None:
        """Test missing parent directories are created with dir_mode."""
        target = tmp_path / "x" / "y" / "new.txt"

        ops.ensure_file(target, dir_mode=0o750, file_mode=0o640)

        assert target.is_file()
        assert (tmp_path / "x").stat().st_mode & 0o777 == 0o750
        assert target.parent.stat().st_mode & 0o777 == 0o750
        assert target.stat().st_mode & 0o777 == 0o640

    def test_directory_in_the_way(self, ops: FileOps, tmp_path: Path) -> None:
        """Test an existing directory is a wrong-type error."""
        target = tmp_path / "dir"
        target.mkdir()

        with pytest.raises(WrongTypeError, match="is not a file") as exc_info:
            ops.ensure_file(target)

        assert exc_info.value.operation == "ensure_file"
        assert exc_info.value.code == "EISDIR"

    def test_parent_is_a_file(self, ops: FileOps, tmp_path: Path) -> None:
        """Test a file cannot be placed under a non-directory."""
        parent = tmp_path / "plain.txt"
        parent.write_text("x")

        with pytest.raises(FsOpsError, match="is not a directory"):
            ops.ensure_file(parent / "child.txt")

    def test_bare_file_name(
        self, ops: FileOps, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a name without directory part resolves against the working directory."""
        monkeypatch.chdir(tmp_path)

        ops.ensure_file("bare.txt")

        assert (tmp_path / "bare.txt").is_file()
