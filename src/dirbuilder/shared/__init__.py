"""Shared types reused across dirbuilder features."""

from .conflict_policy import ConflictPolicy
from .errors import (
    ArgumentError,
    ConflictError,
    DirBuilderError,
    InvalidOperationError,
    InvalidPathError,
    NotFoundError,
)

__all__ = [
    "ArgumentError",
    "ConflictError",
    "ConflictPolicy",
    "DirBuilderError",
    "InvalidOperationError",
    "InvalidPathError",
    "NotFoundError",
]
