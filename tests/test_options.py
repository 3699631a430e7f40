"""Tests for option models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fsops.options import (
    CopyOptions,
    EnsureDirOptions,
    EnsureFileOptions,
    MoveOptions,
    coerce_options,
)


class TestCopyOptions:
    """Tests for CopyOptions defaults and aliases."""

    def test_defaults(self) -> None:
        """Test every field has its documented default."""
        opts = CopyOptions()

        assert opts.force is True
        assert opts.dereference is False
        assert opts.error_on_exist is False
        assert opts.filter is None
        assert opts.preserve_timestamps is False
        assert opts.recursive is True
        assert opts.verbatim_symlinks is False

    def test_camel_case_aliases(self) -> None:
        """Test camelCase keys populate snake_case fields."""
        opts = CopyOptions.model_validate({"errorOnExist": True, "verbatimSymlinks": True})

        assert opts.error_on_exist is True
        assert opts.verbatim_symlinks is True

    def test_frozen(self) -> None:
        """Test options cannot be mutated after construction."""
        opts = CopyOptions()

        with pytest.raises(ValidationError):
            opts.force = False

    def test_unknown_field_rejected(self) -> None:
        """Test a misspelled option is an error, not silently ignored."""
        with pytest.raises(ValidationError):
            CopyOptions.model_validate({"forse": False})

    def test_filter_accepts_callable(self) -> None:
        """Test a predicate can be supplied as filter."""
        opts = CopyOptions(filter=lambda src, dest: src.endswith(".txt"))

        assert opts.filter is not None
        assert opts.filter("a.txt", "b.txt") is True


class TestModeParsing:
    """Tests for mode fields on ensure options."""

    def test_octal_string_mode(self) -> None:
        """Test an octal string is converted to int."""
        assert EnsureDirOptions(mode="755").mode == 0o755

    def test_int_mode_kept(self) -> None:
        """Test an int mode is kept as is."""
        assert EnsureFileOptions(file_mode=0o600).file_mode == 0o600

    def test_invalid_mode_rejected(self) -> None:
        """Test a non-octal string is rejected."""
        with pytest.raises(ValidationError):
            EnsureFileOptions(dir_mode="rwx")


class TestCoerceOptions:
    """Tests for coerce_options."""

    def test_none_gives_defaults(self) -> None:
        """Test None produces a default instance."""
        assert coerce_options(MoveOptions, None) == MoveOptions()

    def test_mapping_and_overrides(self) -> None:
        """Test overrides apply on top of a mapping."""
        opts = coerce_options(CopyOptions, {"force": False}, recursive=False)

        assert opts.force is False
        assert opts.recursive is False

    def test_instance_returned_unchanged(self) -> None:
        """Test an instance without overrides is reused."""
        original = CopyOptions(force=False)

        assert coerce_options(CopyOptions, original) is original

    def test_instance_with_overrides_is_copied(self) -> None:
        """Test overrides on an instance produce a new value."""
        original = CopyOptions(force=False)

        updated = coerce_options(CopyOptions, original, dereference=True)

        assert updated is not original
        assert updated.dereference is True
        assert original.dereference is False

    def test_instance_overrides_are_validated(self) -> None:
        """Test overrides on an instance go through field validation."""
        updated = coerce_options(EnsureDirOptions, EnsureDirOptions(), mode="750")

        assert updated.mode == 0o750

        with pytest.raises(ValidationError):
            coerce_options(EnsureDirOptions, EnsureDirOptions(), mode="rwx")
