"""CLI commands using Typer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from fsops.context import OpsContext

import typer
from pydantic import ValidationError
from rich.logging import RichHandler

from fsops import __version__
from fsops.console import Reporter
from fsops.context import create_context
from fsops.errors import FsOpsError

app = typer.Typer(
    name="fsops",
    help="Safe copy, move, remove and ensure operations",
    no_args_is_help=True,
)

reporter = Reporter()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        reporter.console.print(f"fsops v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route fsops debug logging to the console when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=reporter.console, show_path=False)],
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log each filesystem decision")
    ] = False,
) -> None:
    """Safe copy, move, remove and ensure operations."""
    configure_logging(verbose)


def _run(action: Callable[[], None], success: str) -> None:
    """Run an operation and report its outcome.

    Raises:
        typer.Exit: With code 1 if the operation failed.
    """
    try:
        action()
    except FsOpsError as e:
        reporter.show_error(str(e))
        raise typer.Exit(1) from e
    except ValidationError as e:
        reporter.show_error(f"Invalid options: {e.errors()[0]['msg']}")
        raise typer.Exit(1) from e
    except OSError as e:
        reporter.show_error(f"Filesystem error: {e}")
        raise typer.Exit(1) from e
    reporter.show_success(success)


@app.command()
def copy(
    src: Annotated[str, typer.Argument(help="Source file, directory or symlink")],
    dest: Annotated[str, typer.Argument(help="Destination path")],
    force: Annotated[
        bool, typer.Option("--force/--no-force", help="Overwrite existing files")
    ] = True,
    error_on_exist: Annotated[
        bool,
        typer.Option("--error-on-exist", help="Fail on existing files when not forcing"),
    ] = False,
    dereference: Annotated[
        bool, typer.Option("--dereference", "-L", help="Follow symlinks in the source")
    ] = False,
    preserve_timestamps: Annotated[
        bool, typer.Option("--preserve-timestamps", "-p", help="Keep access and modification times")
    ] = False,
    recursive: Annotated[
        bool, typer.Option("--recursive/--no-recursive", help="Descend into directories")
    ] = True,
    verbatim_symlinks: Annotated[
        bool,
        typer.Option("--verbatim-symlinks", help="Do not resolve relative symlink targets"),
    ] = False,
    _context=None,
) -> None:
    """Copy a file or directory tree."""
    ctx: OpsContext = _context or create_context()
    _run(
        lambda: ctx.ops.copy(
            src,
            dest,
            force=force,
            error_on_exist=error_on_exist,
            dereference=dereference,
            preserve_timestamps=preserve_timestamps,
            recursive=recursive,
            verbatim_symlinks=verbatim_symlinks,
        ),
        f"Copied {src} to {dest}",
    )


@app.command()
def move(
    src: Annotated[str, typer.Argument(help="Source file or directory")],
    dest: Annotated[str, typer.Argument(help="Destination path")],
    overwrite: Annotated[
        bool, typer.Option("--overwrite", "-f", help="Replace an existing destination")
    ] = False,
    _context=None,
) -> None:
    """Move a file or directory tree."""
    ctx: OpsContext = _context or create_context()
    _run(lambda: ctx.ops.move(src, dest, overwrite=overwrite), f"Moved {src} to {dest}")


@app.command()
def remove(
    paths: Annotated[list[str], typer.Argument(help="Paths to remove")],
    _context=None,
) -> None:
    """Remove files or directory trees. Missing paths are ignored."""
    ctx: OpsContext = _context or create_context()
    for path in paths:
        _run(lambda path=path: ctx.ops.remove(path), f"Removed {path}")


@app.command("empty-dir")
def empty_dir(
    path: Annotated[str, typer.Argument(help="Directory to empty or create")],
    _context=None,
) -> None:
    """Make a directory exist and be empty."""
    ctx: OpsContext = _context or create_context()
    _run(lambda: ctx.ops.empty_dir(path), f"Emptied {path}")


@app.command("ensure-dir")
def ensure_dir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    mode: Annotated[
        str | None, typer.Option("--mode", "-m", help="Octal mode for new directories")
    ] = None,
    _context=None,
) -> None:
    """Create a directory and its parents if missing."""
    ctx: OpsContext = _context or create_context()
    _run(lambda: ctx.ops.ensure_dir(path, mode=mode), f"Ensured directory {path}")


@app.command("ensure-file")
def ensure_file(
    path: Annotated[str, typer.Argument(help="File to create")],
    file_mode: Annotated[
        str | None, typer.Option("--file-mode", help="Octal mode for a new file")
    ] = None,
    dir_mode: Annotated[
        str | None, typer.Option("--dir-mode", help="Octal mode for new parent directories")
    ] = None,
    _context=None,
) -> None:
    """Create an empty file and its parents if missing."""
    ctx: OpsContext = _context or create_context()
    _run(
        lambda: ctx.ops.ensure_file(path, file_mode=file_mode, dir_mode=dir_mode),
        f"Ensured file {path}",
    )


if __name__ == "__main__":
    app()
