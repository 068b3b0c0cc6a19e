# Path: `src/dirbuilder/features/path/__init__.py`
# Summary: Export path feature domain symbols.
# Why: Provide a stable import surface for the builder feature and tests.

from .domain.separators import PathSeparator
from .domain.storage_path import (
    DRIVE_MARKER,
    INVALID_FILE_NAME_CHARACTERS,
    INVALID_PATH_CHARACTERS,
    StoragePath,
    as_storage_path,
)

__all__ = [
    "PathSeparator",
    "StoragePath",
    "as_storage_path",
    "DRIVE_MARKER",
    "INVALID_FILE_NAME_CHARACTERS",
    "INVALID_PATH_CHARACTERS",
]
