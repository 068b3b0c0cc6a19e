"""Summary: Ports defining the directory builder's external collaborators.
Why: Decouple the commit pipeline from concrete filesystem and archive adapters."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class FileSystemGateway(Protocol):
    """Abstract filesystem operations needed by the builder."""

    def file_exists(self, path: Path) -> bool:
        """Return True when ``path`` is an existing regular file."""
        ...

    def directory_exists(self, path: Path) -> bool:
        """Return True when ``path`` is an existing directory."""
        ...

    def create_directory(self, path: Path) -> Path:
        """Create ``path`` and any missing parents, returning it."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Return the full contents of the file at ``path``."""
        ...

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Create or truncate the file at ``path`` and write ``data``."""
        ...

    def enumerate_files(self, directory: Path) -> list[Path]:
        """Return the files directly inside ``directory``."""
        ...

    def enumerate_directories(self, directory: Path) -> list[Path]:
        """Return the subdirectories directly inside ``directory``."""
        ...

    def delete_file(self, path: Path) -> None:
        """Remove the file at ``path``."""
        ...

    def delete_directory_recursive(self, path: Path) -> None:
        """Remove ``path`` and everything beneath it."""
        ...


@dataclass(slots=True, frozen=True)
class ArchiveEntry:
    """One member of an archive, addressed by its full internal name."""

    name: str
    opener: Callable[[], BinaryIO]
    is_directory: bool = False

    def open(self) -> BinaryIO:
        return self.opener()


@runtime_checkable
class ArchiveSource(Protocol):
    """Archive handle yielding entries; closing it releases every entry stream."""

    def entries(self) -> Iterable[ArchiveEntry]:
        """Yield the archive's entries in stored order."""
        ...

    def close(self) -> None:
        """Release the archive and any entry streams it opened."""
        ...


__all__ = ["ArchiveEntry", "ArchiveSource", "FileSystemGateway"]
