"""Use case staging filesystem mutations and applying them as one batch.

Where: src/dirbuilder/features/builder/usecases/directory_builder.py
What: Accumulate file, directory, copy, archive and delete intents and commit them.
Why: Give callers a fluent way to describe a directory tree before touching disk.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import closing
from dataclasses import dataclass, field
from functools import partial
from logging import Logger
from pathlib import Path
from types import TracebackType

from dirbuilder.config.settings import DEFAULT_CONFLICT_POLICY
from dirbuilder.features.path import StoragePath, as_storage_path
from dirbuilder.features.path.domain.storage_path import PARENT_SEGMENT
from dirbuilder.platform.logging import logger as default_logger
from dirbuilder.shared.conflict_policy import ConflictPolicy
from dirbuilder.shared.errors import InvalidPathError, NotFoundError

from ..adapters.archives.zip_archive import ZipArchiveSource
from ..adapters.filesystem.local import LocalFileSystemGateway
from ..domain.content import DeferredBytes, FileContent, InlineBytes, to_byte_source
from ..domain.intents import (
    ArchiveIntent,
    CopyIntent,
    DeleteIntent,
    DirectoryIntent,
    FileIntent,
    MutationSet,
    PendingCounts,
)
from .conflicts import WriteAction, decide_write
from .ports import ArchiveSource, FileSystemGateway

PathInput = str | StoragePath
HostPath = str | os.PathLike[str] | StoragePath


@dataclass(slots=True)
class BuildReport:
    """Summary of the filesystem effects of one ``build()`` call."""

    root: Path
    written: list[Path] = field(default_factory=list)
    renamed: list[tuple[Path, Path]] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    deleted: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)
    duration_seconds: float = 0.0


class DirectoryBuilder:
    """Stage filesystem mutations under ``root`` and apply them with ``build()``.

    Every ``add_*``/``delete`` call returns the builder so calls can be chained.
    Staged destinations are always relative to the root. The builder owns every
    stream and archive handed to it and releases them after ``build()`` (success
    or failure) or on ``close()``.

    Instances are not thread-safe; a single owner must serialize staging and
    building.
    """

    _root: Path
    _conflict_policy: ConflictPolicy
    _filesystem: FileSystemGateway
    _logger: Logger
    _mutations: MutationSet

    def __init__(
        self,
        root: HostPath,
        conflict_policy: ConflictPolicy | str | None = None,
        *,
        filesystem: FileSystemGateway | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._root = _to_host_path(root)
        self.conflict_policy = (
            DEFAULT_CONFLICT_POLICY if conflict_policy is None else conflict_policy
        )
        self._filesystem = filesystem or LocalFileSystemGateway()
        self._logger = logger or default_logger
        self._mutations = MutationSet()

    # Properties ------------------------------------------------------------

    @property
    def root(self) -> Path:
        return self._root

    @property
    def conflict_policy(self) -> ConflictPolicy:
        return self._conflict_policy

    @conflict_policy.setter
    def conflict_policy(self, value: ConflictPolicy | str) -> None:
        if not isinstance(value, ConflictPolicy):
            value = ConflictPolicy.from_user_input(value)
        self._conflict_policy = value

    @property
    def pending(self) -> PendingCounts:
        return self._mutations.counts()

    def __len__(self) -> int:
        return len(self._mutations)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return (
            f"DirectoryBuilder(root={str(self._root)!r}, "
            f"conflict_policy={self._conflict_policy.value!r}, pending={len(self)})"
        )

    # Staging ---------------------------------------------------------------

    def add_file(
        self,
        path: PathInput,
        content: FileContent = b"",
        *,
        encoding: str = "utf-8",
    ) -> "DirectoryBuilder":
        """Stage a file write.

        Args:
            path: Destination relative to the root.
            content: Bytes, text, an open binary stream, a zero-argument loader,
                or a prepared byte source.
            encoding: Encoding applied when ``content`` is text.

        Raises:
            InvalidPathError: If ``path`` is absolute, empty, or escapes the root.
        """
        destination = self._staged_destination(path, allow_root=False)
        self._mutations.files.append(
            FileIntent(destination, to_byte_source(content, encoding=encoding))
        )
        return self

    def add_directory(self, path: PathInput) -> "DirectoryBuilder":
        destination = self._staged_destination(path)
        self._mutations.directories.append(DirectoryIntent(destination))
        return self

    def add_existing(self, destination: PathInput, source: HostPath) -> "DirectoryBuilder":
        """Stage a copy of an existing host file or directory tree.

        Raises:
            NotFoundError: If ``source`` is neither an existing file nor directory.
        """
        target = self._staged_destination(destination)
        source_path = _to_host_path(source)
        if not self._source_exists(source_path):
            raise NotFoundError(f"Source does not exist: {source_path}")
        self._mutations.copies.append(CopyIntent(target, source_path))
        return self

    def extract_archive(
        self,
        destination: PathInput,
        archive: ArchiveSource | str | os.PathLike[str],
    ) -> "DirectoryBuilder":
        """Stage every entry of ``archive`` beneath ``destination``.

        ``archive`` may be an ``ArchiveSource`` or the host path of a zip file,
        which is opened immediately.
        """
        target = self._staged_destination(destination)
        if not isinstance(archive, ArchiveSource):
            archive = ZipArchiveSource.open(Path(archive))
        self._mutations.archives.append(ArchiveIntent(target, archive))
        return self

    def delete(self, path: PathInput) -> "DirectoryBuilder":
        destination = self._staged_destination(path, allow_root=False)
        self._mutations.deletions.append(DeleteIntent(destination))
        return self

    # Commit ----------------------------------------------------------------

    def build(self) -> BuildReport:
        """Apply every staged intent against the root.

        Steps run in a fixed order: ensure the root, delete, expand copies,
        expand archives, create directories, write files. The first failure
        aborts the remaining steps; effects already applied stay on disk.

        Returns:
            BuildReport: Paths written, renamed, skipped, deleted and created.

        Raises:
            NotFoundError: A deletion or copy source no longer exists.
            ConflictError: A destination exists under ``THROW_ON_CONFLICT``.
            InvalidPathError: An expanded name cannot form a valid path.
        """
        report = BuildReport(root=self._root)
        started = time.perf_counter()
        self._log(
            logging.INFO,
            "build.start",
            "Building %s [pending=%d]",
            self._root,
            len(self._mutations),
            pending=len(self._mutations),
        )

        try:
            _ = self._filesystem.create_directory(self._root)
            self._apply_deletions(report)
            self._expand_copies()
            self._expand_archives()
            self._create_directories(report)
            self._write_files(report)
        except Exception as exc:
            self._log(
                logging.ERROR,
                "build.error",
                "Build of %s failed: %s",
                self._root,
                exc,
                error_message=str(exc) or exc.__class__.__name__,
            )
            raise
        finally:
            self._mutations.release()

        report.duration_seconds = time.perf_counter() - started
        self._log(
            logging.INFO,
            "build.complete",
            "Built %s [written=%d, renamed=%d, skipped=%d, deleted=%d, directories=%d]",
            self._root,
            len(report.written),
            len(report.renamed),
            len(report.skipped),
            len(report.deleted),
            len(report.directories),
            written=len(report.written),
            renamed=len(report.renamed),
            skipped=len(report.skipped),
            deleted=len(report.deleted),
            directories=len(report.directories),
            duration_seconds=report.duration_seconds,
        )
        return report

    def build_async(self, executor: ThreadPoolExecutor | None = None) -> Future[BuildReport]:
        """Run ``build()`` on a background worker and return its future.

        The future resolves to the ``BuildReport`` or carries the first failure.
        """
        if executor is not None:
            return executor.submit(self.build)

        own_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dirbuilder")
        future = own_executor.submit(self.build)
        own_executor.shutdown(wait=False)
        return future

    def close(self) -> None:
        """Release every held stream and archive and drop all staged intents."""

        self._mutations.release()

    def __enter__(self) -> "DirectoryBuilder":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    # Pipeline steps --------------------------------------------------------

    def _apply_deletions(self, report: BuildReport) -> None:
        for intent in self._mutations.deletions:
            target = self._resolve(intent.destination)
            if self._filesystem.file_exists(target):
                self._filesystem.delete_file(target)
            elif self._filesystem.directory_exists(target):
                self._filesystem.delete_directory_recursive(target)
            else:
                raise NotFoundError(f"Nothing to delete at {target}")
            report.deleted.append(target)
            self._log(logging.INFO, "build.delete", "Deleted %s", target, target_path=target)
        self._mutations.deletions.clear()

    def _expand_copies(self) -> None:
        copies = list(self._mutations.copies)
        self._mutations.copies.clear()

        for intent in copies:
            if self._filesystem.file_exists(intent.source):
                self._stage_copied_file(intent.source, intent.destination)
                continue
            if not self._filesystem.directory_exists(intent.source):
                raise NotFoundError(f"Source does not exist: {intent.source}")

            stack: list[tuple[Path, StoragePath]] = [(intent.source, intent.destination)]
            while stack:
                directory, destination = stack.pop()
                self._mutations.directories.append(DirectoryIntent(destination))
                for file_path in self._filesystem.enumerate_files(directory):
                    self._stage_copied_file(file_path, _child_destination(destination, file_path))
                for subdirectory in reversed(self._filesystem.enumerate_directories(directory)):
                    stack.append((subdirectory, _child_destination(destination, subdirectory)))

    def _stage_copied_file(self, source: Path, destination: StoragePath) -> None:
        loader = partial(self._filesystem.read_bytes, source)
        self._mutations.files.append(FileIntent(destination, DeferredBytes(loader)))

    def _expand_archives(self) -> None:
        archives = self._mutations.archives
        while archives:
            intent = archives.pop(0)
            with closing(intent.archive):
                for entry in intent.archive.entries():
                    destination = StoragePath(intent.destination, entry.name)
                    _ensure_within_root(destination)
                    if entry.is_directory:
                        self._mutations.directories.append(DirectoryIntent(destination))
                        continue
                    with closing(entry.open()) as stream:
                        data = stream.read()
                    self._mutations.files.append(FileIntent(destination, InlineBytes(data)))

    def _create_directories(self, report: BuildReport) -> None:
        targets: list[Path] = [
            self._resolve(intent.destination) for intent in self._mutations.directories
        ]
        targets.extend(
            self._resolve(intent.destination).parent for intent in self._mutations.files
        )

        seen: set[Path] = set()
        for target in targets:
            if target in seen:
                continue
            seen.add(target)
            if self._filesystem.directory_exists(target):
                continue
            _ = self._filesystem.create_directory(target)
            report.directories.append(target)
            self._log(
                logging.DEBUG,
                "build.directory",
                "Created directory %s",
                target,
                target_path=target,
            )
        self._mutations.directories.clear()

    def _write_files(self, report: BuildReport) -> None:
        for intent in self._mutations.files:
            target = self._resolve(intent.destination)
            _ = self._filesystem.create_directory(target.parent)

            decision = decide_write(
                target,
                self._conflict_policy,
                exists=self._filesystem.file_exists,
            )
            if decision.action is WriteAction.SKIP:
                intent.content.close()
                report.skipped.append(target)
                self._log(logging.INFO, "build.skip", "Skipped existing %s", target, target_path=target)
                continue

            self._filesystem.write_bytes(decision.path, intent.content.read())
            report.written.append(decision.path)
            if decision.action is WriteAction.RENAME:
                report.renamed.append((target, decision.path))
                self._log(
                    logging.INFO,
                    "build.rename",
                    "Renamed %s → %s",
                    target,
                    decision.path,
                    source_path=target,
                    target_path=decision.path,
                )
            else:
                self._log(
                    logging.DEBUG,
                    "build.write",
                    "Wrote %s",
                    decision.path,
                    target_path=decision.path,
                )
        self._mutations.files.clear()

    # Helpers ---------------------------------------------------------------

    def _staged_destination(self, path: PathInput, *, allow_root: bool = True) -> StoragePath:
        destination = as_storage_path(path)
        if destination.is_absolute:
            raise InvalidPathError(f"The path '{destination}' is not a relative path")
        if not allow_root and not destination.segments:
            raise InvalidPathError("The path must name an entry beneath the root")
        _ensure_within_root(destination)
        return destination

    def _source_exists(self, source: Path) -> bool:
        return self._filesystem.file_exists(source) or self._filesystem.directory_exists(source)

    def _resolve(self, destination: StoragePath) -> Path:
        return self._root.joinpath(*destination.segments)

    def _log(self, level: int, event: str, message: str, *args: object, **extra: object) -> None:
        payload: dict[str, object] = {
            "build_event": event,
            "target_base_path": self._root,
        }
        payload.update(extra)
        self._logger.log(level, message, *args, extra=payload)


def _to_host_path(value: HostPath) -> Path:
    if isinstance(value, StoragePath):
        return value.to_native()
    return Path(value)


def _child_destination(parent: StoragePath, source: Path) -> StoragePath:
    """Map the host entry ``source`` to a single segment beneath ``parent``.

    Raises:
        InvalidPathError: If the host name is blank or holds a separator, so it
            cannot stand as one segment.
    """
    child = StoragePath(*parent.segments, source.name)
    if len(child.segments) != len(parent.segments) + 1 or child.name != source.name:
        raise InvalidPathError(f"Cannot copy '{source}': its name is not a valid path segment")
    return child


def _ensure_within_root(destination: StoragePath) -> None:
    if destination.is_absolute:
        raise InvalidPathError(f"The path '{destination}' is not a relative path")
    if destination.segments and destination.segments[0] == PARENT_SEGMENT:
        raise InvalidPathError(f"The path '{destination}' escapes the build root")


__all__ = ["BuildReport", "DirectoryBuilder"]
