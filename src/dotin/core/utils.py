"""Filesystem helpers shared by dotin commands."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List


def create_folder_at(path: Path) -> None:
    """Create a folder and any missing ancestors.

    Succeeds silently when the folder already exists.

    Raises:
        OSError: If the folder cannot be created, for example because a file
            occupies the path or one of its ancestors.
    """
    Path(path).mkdir(parents=True, exist_ok=True)


def are_in_the_same_filesystem(path_a: Path, path_b: Path) -> bool:
    """Check whether two existing entries live on the same filesystem.

    Symlinks are not followed, a link is judged by where the link itself lives.

    Raises:
        OSError: If either path cannot be stat'ed.
    """
    return os.lstat(path_a).st_dev == os.lstat(path_b).st_dev


def dedup_nested(directories: List[Path]) -> None:
    """Remove directories that are ancestors of another entry of the list.

    Creating the deepest directories recursively creates their ancestors, so
    only those are kept. The list is modified in place and exact duplicates
    are collapsed to their first occurrence.
    """
    kept: List[Path] = []
    for directory in directories:
        if any(other.is_relative_to(directory) for other in kept):
            continue
        kept = [other for other in kept if not directory.is_relative_to(other)]
        kept.append(directory)
    directories[:] = kept
