"""Normalized storage paths and a staged directory builder."""

from dirbuilder.features.builder import (
    ArchiveEntry,
    ArchiveSource,
    BuildReport,
    DirectoryBuilder,
    FileSystemGateway,
    LocalFileSystemGateway,
    ZipArchiveSource,
)
from dirbuilder.features.path import PathSeparator, StoragePath
from dirbuilder.shared import (
    ArgumentError,
    ConflictError,
    ConflictPolicy,
    DirBuilderError,
    InvalidOperationError,
    InvalidPathError,
    NotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "ArchiveEntry",
    "ArchiveSource",
    "ArgumentError",
    "BuildReport",
    "ConflictError",
    "ConflictPolicy",
    "DirBuilderError",
    "DirectoryBuilder",
    "FileSystemGateway",
    "InvalidOperationError",
    "InvalidPathError",
    "LocalFileSystemGateway",
    "NotFoundError",
    "PathSeparator",
    "StoragePath",
    "ZipArchiveSource",
]
