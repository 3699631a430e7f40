"""Tests for empty_dir."""

from __future__ import annotations

import os
from pathlib import Path

from fsops.empty_dir import empty_dir
from fsops.ops import FileOps


class TestEmptyDir:
    """Tests for empty_dir."""

    def test_empties_populated_directory(self, ops: FileOps, sample_tree: Path) -> None:
        """Test every entry is removed but the directory stays."""
        ops.empty_dir(sample_tree)

        assert sample_tree.is_dir()
        assert os.listdir(sample_tree) == []

    def test_creates_missing_directory(self, ops: FileOps, tmp_path: Path) -> None:
        """Test an absent directory is created empty, parents included."""
        target = tmp_path / "a" / "b"

        ops.empty_dir(target)

        assert target.is_dir()
        assert os.listdir(target) == []

    def test_already_empty(self, ops: FileOps, tmp_path: Path) -> None:
        """Test an empty directory is left as is."""
        ops.empty_dir(tmp_path)

        assert os.listdir(tmp_path) == []

    def test_symlinked_directory_content_survives(self, ops: FileOps, tmp_path: Path) -> None:
        """Test a link inside the directory is removed without touching its target."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "keep.txt").touch()
        target = tmp_path / "target"
        target.mkdir()
        (target / "link").symlink_to(outside)

        ops.empty_dir(target)

        assert os.listdir(target) == []
        assert (outside / "keep.txt").exists()

    def test_without_rm_primitive(self, no_rm_fs, sample_tree: Path) -> None:
        """Test emptying works through the manual removal path."""
        empty_dir(no_rm_fs, os.path, str(sample_tree))

        assert os.listdir(sample_tree) == []
