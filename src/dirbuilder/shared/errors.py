"""
Summary: Exception hierarchy shared by the path and builder features.
Why: Let callers catch one base type or the builtin family they already expect.
"""

from __future__ import annotations

from pathlib import Path


class DirBuilderError(Exception):
    """Base exception for path normalization and directory building errors."""


class InvalidPathError(DirBuilderError, ValueError):
    """Raised when a path segment is malformed or used where it is not allowed."""


class ArgumentError(DirBuilderError, ValueError):
    """Raised for illegal argument combinations such as appending an absolute path."""


class InvalidOperationError(DirBuilderError, RuntimeError):
    """Raised when an operation cannot be applied to the current value."""


class NotFoundError(DirBuilderError, FileNotFoundError):
    """Raised when a referenced filesystem entry does not exist."""


class ConflictError(DirBuilderError, FileExistsError):
    """Raised when a destination already exists under the throw policy."""

    destination: Path

    def __init__(self, destination: Path) -> None:
        self.destination = destination
        super().__init__(f"The file '{destination.name}' already exists: {destination}")


__all__ = [
    "DirBuilderError",
    "InvalidPathError",
    "ArgumentError",
    "InvalidOperationError",
    "NotFoundError",
    "ConflictError",
]
