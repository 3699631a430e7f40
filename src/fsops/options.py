"""Option models for fsops operations.

Each top-level call builds one fully-defaulted, frozen options value and
passes it unchanged through every recursive step.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "CopyFilter",
    "CopyOptions",
    "EnsureDirOptions",
    "EnsureFileOptions",
    "MoveOptions",
    "coerce_options",
]

CopyFilter = Callable[[str, str], Union[bool, Awaitable[bool]]]

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _parse_mode(value: Any) -> int | None:
    """Accept an int or an octal string such as ``"755"``."""
    if value is None or isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 8)
        except ValueError as e:
            raise ValueError(f"Invalid octal mode: {value!r}") from e
    raise ValueError(f"Mode must be an int or octal string, got {type(value).__name__}")


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class CopyOptions(_Options):
    """Options for ``copy``."""

    force: bool = True
    dereference: bool = False
    error_on_exist: bool = Field(default=False, alias="errorOnExist")
    filter: CopyFilter | None = None
    preserve_timestamps: bool = Field(default=False, alias="preserveTimestamps")
    recursive: bool = True
    verbatim_symlinks: bool = Field(default=False, alias="verbatimSymlinks")


class MoveOptions(_Options):
    """Options for ``move``."""

    overwrite: bool = False


class EnsureDirOptions(_Options):
    """Options for ``ensure_dir``."""

    mode: int | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def _validate_mode(cls, value: Any) -> int | None:
        return _parse_mode(value)


class EnsureFileOptions(_Options):
    """Options for ``ensure_file``."""

    file_mode: int | None = Field(default=None, alias="fileMode")
    dir_mode: int | None = Field(default=None, alias="dirMode")

    @field_validator("file_mode", "dir_mode", mode="before")
    @classmethod
    def _validate_mode(cls, value: Any) -> int | None:
        return _parse_mode(value)


def coerce_options(
    model: type[_ModelT],
    options: _ModelT | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> _ModelT:
    """Build a complete options value from a model, mapping or None.

    Args:
        model: Options model class.
        options: Existing instance, mapping of fields, or None for defaults.
        **overrides: Field values that take precedence over ``options``.

    Returns:
        A new frozen instance of ``model``.

    Raises:
        pydantic.ValidationError: If a field is unknown or has a bad value.
    """
    if isinstance(options, model):
        if not overrides:
            return options
        # model_copy skips validation, so rebuild from field values.
        data: dict[str, Any] = dict(options)
        data.update(overrides)
        return model.model_validate(data)
    data = dict(options or {})
    data.update(overrides)
    return model.model_validate(data)
