# Path: `src/dirbuilder/features/builder/__init__.py`
# Summary: Export builder domain, ports, adapters and the DirectoryBuilder use case.
# Why: Provide a stable import surface for callers and tests.

from dirbuilder.shared.conflict_policy import ConflictPolicy

from .adapters.archives.zip_archive import ZipArchiveSource
from .adapters.filesystem.local import LocalFileSystemGateway
from .domain.content import (
    ByteSource,
    DeferredBytes,
    FileContent,
    InlineBytes,
    StreamBytes,
    to_byte_source,
)
from .domain.intents import (
    ArchiveIntent,
    CopyIntent,
    DeleteIntent,
    DirectoryIntent,
    FileIntent,
    MutationSet,
    PendingCounts,
)
from .usecases.conflicts import WriteAction, WriteDecision, decide_write, find_available_path
from .usecases.directory_builder import BuildReport, DirectoryBuilder
from .usecases.ports import ArchiveEntry, ArchiveSource, FileSystemGateway

__all__ = [
    "ArchiveEntry",
    "ArchiveIntent",
    "ArchiveSource",
    "BuildReport",
    "ByteSource",
    "ConflictPolicy",
    "CopyIntent",
    "DeferredBytes",
    "DeleteIntent",
    "DirectoryBuilder",
    "DirectoryIntent",
    "FileContent",
    "FileIntent",
    "FileSystemGateway",
    "InlineBytes",
    "LocalFileSystemGateway",
    "MutationSet",
    "PendingCounts",
    "StreamBytes",
    "WriteAction",
    "WriteDecision",
    "ZipArchiveSource",
    "decide_write",
    "find_available_path",
    "to_byte_source",
]
