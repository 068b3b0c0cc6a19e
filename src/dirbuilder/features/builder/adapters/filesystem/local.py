"""Filesystem adapter for the directory builder."""

from __future__ import annotations

from pathlib import Path

from dirbuilder.platform.filesystem import ensure_directory, remove_directory_tree

from ...usecases.ports import FileSystemGateway


class LocalFileSystemGateway(FileSystemGateway):
    """Thin wrapper around the local filesystem."""

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    def directory_exists(self, path: Path) -> bool:
        return path.is_dir()

    def create_directory(self, path: Path) -> Path:
        return ensure_directory(path)

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_bytes(self, path: Path, data: bytes) -> None:
        _ = path.write_bytes(data)

    def enumerate_files(self, directory: Path) -> list[Path]:
        return sorted(entry for entry in directory.iterdir() if entry.is_file())

    def enumerate_directories(self, directory: Path) -> list[Path]:
        return sorted(entry for entry in directory.iterdir() if entry.is_dir())

    def delete_file(self, path: Path) -> None:
        path.unlink()

    def delete_directory_recursive(self, path: Path) -> None:
        remove_directory_tree(path)


__all__ = ["LocalFileSystemGateway"]
