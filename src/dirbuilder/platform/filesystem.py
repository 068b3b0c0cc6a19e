"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import os
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def remove_directory_tree(directory: Path) -> None:
    """Delete ``directory`` and everything beneath it, deepest entries first.

    ``os.walk`` with ``topdown=False`` yields children before their parents, so
    each directory is empty by the time it is removed and no recursion is needed.
    A symlink passed as ``directory`` is unlinked without touching its target.
    """
    if directory.is_symlink():
        directory.unlink()
        return
    if not directory.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {directory}")

    for root, dirnames, filenames in os.walk(str(directory), topdown=False):
        root_path = Path(root)
        for filename in filenames:
            (root_path / filename).unlink()
        for dirname in dirnames:
            child = root_path / dirname
            if child.is_symlink():
                child.unlink()
            else:
                child.rmdir()
    directory.rmdir()


__all__ = ["ensure_directory", "ensure_parent_directory", "remove_directory_tree"]
