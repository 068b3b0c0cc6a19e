"""
Summary: Byte sources backing staged file writes.
Why: Resolve inline bytes, open streams, and deferred loaders exactly once at build time.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import closing
from dataclasses import dataclass, field
from typing import BinaryIO, TypeAlias

from dirbuilder.shared.errors import InvalidOperationError

Loader: TypeAlias = Callable[[], bytes | BinaryIO]


@dataclass(slots=True, frozen=True)
class InlineBytes:
    """Constant content held in memory."""

    data: bytes

    def read(self) -> bytes:
        return self.data

    def close(self) -> None:
        return None


@dataclass(slots=True)
class StreamBytes:
    """An already-open binary stream owned by the builder until consumed."""

    stream: BinaryIO
    _consumed: bool = field(default=False, init=False, repr=False)

    def read(self) -> bytes:
        if self._consumed:
            raise InvalidOperationError("Stream content has already been consumed")
        self._consumed = True
        with closing(self.stream):
            return self.stream.read()

    def close(self) -> None:
        self._consumed = True
        self.stream.close()


@dataclass(slots=True)
class DeferredBytes:
    """A loader invoked once at build time returning bytes or a binary stream."""

    loader: Loader
    _consumed: bool = field(default=False, init=False, repr=False)

    def read(self) -> bytes:
        if self._consumed:
            raise InvalidOperationError("Deferred content has already been consumed")
        self._consumed = True
        produced = self.loader()
        if isinstance(produced, (bytes, bytearray, memoryview)):
            return bytes(produced)
        with closing(produced):
            return produced.read()

    def close(self) -> None:
        self._consumed = True


ByteSource: TypeAlias = InlineBytes | StreamBytes | DeferredBytes

FileContent: TypeAlias = bytes | bytearray | str | BinaryIO | Loader | ByteSource


def to_byte_source(content: FileContent, *, encoding: str = "utf-8") -> ByteSource:
    """Wrap caller-supplied content in the matching ``ByteSource``.

    Args:
        content: Bytes, text (encoded with ``encoding``), an open binary stream,
            a zero-argument loader, or an existing byte source.
        encoding: Text encoding applied to ``str`` content.

    Returns:
        ByteSource: Source that yields the content once at build time.
    """
    if isinstance(content, (InlineBytes, StreamBytes, DeferredBytes)):
        return content
    if isinstance(content, (bytes, bytearray)):
        return InlineBytes(bytes(content))
    if isinstance(content, str):
        return InlineBytes(content.encode(encoding))
    if hasattr(content, "read"):
        return StreamBytes(content)  # pyright: ignore[reportArgumentType]
    if callable(content):
        return DeferredBytes(content)
    raise TypeError(f"Unsupported file content type: {type(content).__name__}")


__all__ = [
    "ByteSource",
    "DeferredBytes",
    "FileContent",
    "InlineBytes",
    "Loader",
    "StreamBytes",
    "to_byte_source",
]
