"""
Summary: Staged filesystem mutations and the accumulator that owns them.
Why: Keep pending intents explicit so the builder can expand, apply, and release them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from dirbuilder.features.path import StoragePath

from .content import ByteSource

if TYPE_CHECKING:
    from ..usecases.ports import ArchiveSource


@dataclass(slots=True, frozen=True)
class FileIntent:
    """Write ``content`` to ``destination`` relative to the build root."""

    destination: StoragePath
    content: ByteSource


@dataclass(slots=True, frozen=True)
class DirectoryIntent:
    """Ensure ``destination`` exists as a directory beneath the build root."""

    destination: StoragePath


@dataclass(slots=True, frozen=True)
class CopyIntent:
    """Copy the host file or directory at ``source`` to ``destination``."""

    destination: StoragePath
    source: Path


@dataclass(slots=True, frozen=True)
class ArchiveIntent:
    """Extract every entry of ``archive`` beneath ``destination``."""

    destination: StoragePath
    archive: ArchiveSource


@dataclass(slots=True, frozen=True)
class DeleteIntent:
    """Remove the file or directory tree at ``destination``."""

    destination: StoragePath


@dataclass(slots=True, frozen=True)
class PendingCounts:
    """Snapshot of how many intents of each kind are staged."""

    files: int
    directories: int
    copies: int
    archives: int
    deletions: int

    @property
    def total(self) -> int:
        return self.files + self.directories + self.copies + self.archives + self.deletions


@dataclass(slots=True)
class MutationSet:
    """Owned collection of pending intents, kept in staging order per kind."""

    files: list[FileIntent] = field(default_factory=list)
    directories: list[DirectoryIntent] = field(default_factory=list)
    copies: list[CopyIntent] = field(default_factory=list)
    archives: list[ArchiveIntent] = field(default_factory=list)
    deletions: list[DeleteIntent] = field(default_factory=list)

    def counts(self) -> PendingCounts:
        return PendingCounts(
            files=len(self.files),
            directories=len(self.directories),
            copies=len(self.copies),
            archives=len(self.archives),
            deletions=len(self.deletions),
        )

    def __len__(self) -> int:
        return self.counts().total

    def is_empty(self) -> bool:
        return len(self) == 0

    def clear(self) -> None:
        """Forget every intent without touching held resources."""

        self.files.clear()
        self.directories.clear()
        self.copies.clear()
        self.archives.clear()
        self.deletions.clear()

    def release(self) -> None:
        """Close every held stream and archive, then clear all intents.

        Every resource is closed even if an earlier ``close`` raises; the first
        failure is re-raised afterwards.
        """
        first_error: BaseException | None = None
        closers = [intent.content.close for intent in self.files]
        closers.extend(intent.archive.close for intent in self.archives)
        self.clear()

        for close in closers:
            try:
                close()
            except Exception as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error


__all__ = [
    "ArchiveIntent",
    "CopyIntent",
    "DeleteIntent",
    "DirectoryIntent",
    "FileIntent",
    "MutationSet",
    "PendingCounts",
]
