"""Summary: Archive adapter reading entries from zip files.
Why: Feed archive extraction through the ArchiveSource port using the stdlib zipfile reader."""

from __future__ import annotations

import zipfile
from collections.abc import Iterator
from functools import partial
from pathlib import Path
from typing import BinaryIO, IO, cast

from dirbuilder.shared.errors import InvalidOperationError, NotFoundError

from ...usecases.ports import ArchiveEntry, ArchiveSource


class ZipArchiveSource(ArchiveSource):
    """Expose a ``zipfile.ZipFile`` as an ``ArchiveSource``."""

    _archive: zipfile.ZipFile
    _open_streams: list[IO[bytes]]
    _closed: bool

    def __init__(self, archive: zipfile.ZipFile) -> None:
        self._archive = archive
        self._open_streams = []
        self._closed = False

    @classmethod
    def open(cls, path: Path | str) -> "ZipArchiveSource":
        """Open the zip file at ``path`` for reading.

        Raises:
            NotFoundError: If no file exists at ``path``.
        """
        archive_path = Path(path)
        if not archive_path.is_file():
            raise NotFoundError(f"Archive not found: {archive_path}")
        return cls(zipfile.ZipFile(archive_path, mode="r"))

    @property
    def closed(self) -> bool:
        return self._closed

    def entries(self) -> Iterator[ArchiveEntry]:
        if self._closed:
            raise InvalidOperationError("Archive has already been closed")
        for info in self._archive.infolist():
            yield ArchiveEntry(
                name=info.filename,
                opener=partial(self._open_member, info),
                is_directory=info.is_dir(),
            )

    def _open_member(self, info: zipfile.ZipInfo) -> BinaryIO:
        stream = self._archive.open(info, mode="r")
        self._open_streams.append(stream)
        return cast(BinaryIO, stream)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for stream in self._open_streams:
            stream.close()
        self._open_streams.clear()
        self._archive.close()


__all__ = ["ZipArchiveSource"]
