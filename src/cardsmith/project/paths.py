"""Helpers for keeping reference paths relative to the project directory."""

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def get_relative_path(base_dir: PathLike, path: PathLike) -> str:
    """Express a path relative to base_dir.

    Relative input paths are resolved from the working directory. Paths on
    another drive (Windows) cannot be made relative and are returned
    absolute.
    """
    absolute = os.path.abspath(path)
    try:
        relative = os.path.relpath(absolute, os.path.abspath(base_dir))
    except ValueError:
        return Path(absolute).as_posix()
    return Path(relative).as_posix()


def update_relative_path(old_dir: PathLike, relative_path: str, new_dir: PathLike) -> str:
    """Re-express a path relative to old_dir as a path relative to new_dir."""
    absolute = os.path.normpath(os.path.join(os.path.abspath(old_dir), relative_path))
    return get_relative_path(new_dir, absolute)


def same_directory(first: PathLike, second: PathLike) -> bool:
    """Compare two directories after normalisation (case-insensitive where the OS is)."""
    return os.path.normcase(os.path.abspath(first)) == os.path.normcase(
        os.path.abspath(second)
    )
