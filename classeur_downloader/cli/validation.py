"""Preflight checks run before any network call."""
import os
from pathlib import Path
from typing import Sequence, Tuple

import typer

SAVE_PATH_HINT = "'--save-path'"
SEPARATORS = tuple(sep for sep in (os.sep, os.altsep, '/') if sep)


def require_items(folders: Sequence[str], files: Sequence[str]) -> None:
    if not folders and not files:
        raise typer.BadParameter(
            "At least one file or folder must be specified",
            param_hint="'--folders' / '--files'"
        )


def validate_directory(path: str) -> Path:
    """Check that ``path`` is an existing, readable and writable directory."""
    target = Path(path)
    if not target.is_dir():
        raise typer.BadParameter(
            f"Could not stat directory {path}; it may not exist",
            param_hint=SAVE_PATH_HINT
        )
    if not os.access(target, os.R_OK | os.W_OK):
        raise typer.BadParameter(
            f"Could not get write access to directory {path}",
            param_hint=SAVE_PATH_HINT
        )
    return target


def validate_file_target(path: str, overwrite: bool) -> Path:
    """
    Check that ``path`` can receive a single file.

    The parent must be a writable directory, and ``path`` itself must
    either not exist or be a writable file with overwriting enabled.
    """
    target = Path(path)
    validate_directory(str(target.parent))

    if target.exists():
        if target.is_dir():
            raise typer.BadParameter(f"{path} is a directory", param_hint=SAVE_PATH_HINT)
        if not overwrite:
            raise typer.BadParameter(
                f"File {path} exists, and --overwrite is not set.",
                param_hint=SAVE_PATH_HINT
            )
        if not os.access(target, os.W_OK):
            raise typer.BadParameter(
                f"Could not get write access to file {path}",
                param_hint=SAVE_PATH_HINT
            )
    return target


def is_single_file_request(path: str, folders: Sequence[str], files: Sequence[str]) -> bool:
    """One file, no folders, and a path that does not name a directory."""
    return (
        len(files) == 1
        and not folders
        and not path.endswith(SEPARATORS)
        and not Path(path).is_dir()
    )


def validate_save_path(
    path: str,
    folders: Sequence[str],
    files: Sequence[str],
    overwrite: bool
) -> Tuple[str, bool]:
    """
    Validate the destination of a save.

    Returns:
        Tuple of (path, single file mode)
    """
    if is_single_file_request(path, folders, files):
        validate_file_target(path, overwrite)
        return path, True

    validate_directory(path)
    return path, False
