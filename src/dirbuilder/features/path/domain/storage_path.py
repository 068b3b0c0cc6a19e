"""
Summary: Immutable, separator-agnostic path value built from normalized segments.
Why: Give staged destinations one canonical form regardless of how callers spell them.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from functools import total_ordering
from pathlib import Path
from typing import ClassVar, Final, final

from dirbuilder.shared.errors import ArgumentError, InvalidOperationError, InvalidPathError

from .separators import ALTERNATE_SEPARATOR, CANONICAL_SEPARATOR, PathSeparator

_CONTROL_CHARACTERS: Final[str] = "".join(chr(code) for code in range(32))

INVALID_PATH_CHARACTERS: Final[frozenset[str]] = frozenset('"<>|' + _CONTROL_CHARACTERS)
INVALID_FILE_NAME_CHARACTERS: Final[frozenset[str]] = INVALID_PATH_CHARACTERS | frozenset(
    ":*?\\/"
)

DRIVE_MARKER: Final[str] = ":"
PARENT_SEGMENT: Final[str] = ".."


def _split_fragment(raw: str) -> Iterator[str]:
    """Yield the non-blank pieces of ``raw`` split on either separator."""

    unified = raw.replace(ALTERNATE_SEPARATOR.value, CANONICAL_SEPARATOR.value)
    for piece in unified.split(CANONICAL_SEPARATOR.value):
        if piece.strip():
            yield piece


def _normalize(fragments: Iterable[str]) -> tuple[str, ...]:
    """Fold raw fragments into validated segments, resolving ``..`` eagerly.

    Args:
        fragments: Raw strings that may contain either separator.

    Returns:
        tuple[str, ...]: Segments free of separators and blank entries.

    Raises:
        InvalidPathError: If a segment holds a disallowed character. The first
            segment is checked against the path character set so it can carry a
            drive marker; later segments use the stricter file name set.
    """
    segments: list[str] = []
    for raw in fragments:
        for fragment in _split_fragment(raw):
            if fragment == PARENT_SEGMENT and segments and segments[-1] != PARENT_SEGMENT:
                _ = segments.pop()
                continue

            invalid = INVALID_FILE_NAME_CHARACTERS if segments else INVALID_PATH_CHARACTERS
            offending = sorted(invalid.intersection(fragment))
            if offending:
                raise InvalidPathError(
                    f"Path segment {fragment!r} contains invalid characters: {offending!r}"
                )
            segments.append(fragment)
    return tuple(segments)


@final
@total_ordering
class StoragePath:
    """Ordered sequence of path segments with eager ``..`` resolution.

    Instances never change after construction; every operation that looks like
    a mutation returns a new ``StoragePath``. Equality, hashing and ordering
    ignore case, matching the path semantics of case-insensitive filesystems.
    """

    __slots__ = ("_segments", "_key")

    DEFAULT_SEPARATOR: ClassVar[PathSeparator] = CANONICAL_SEPARATOR

    _segments: tuple[str, ...]
    _key: tuple[str, ...]

    def __init__(self, *fragments: str | StoragePath) -> None:
        """Build a path from raw strings and/or existing paths.

        Args:
            *fragments: Raw strings (split on ``/`` and ``\\``) or ``StoragePath``
                values whose segments are spliced in order.

        Raises:
            InvalidPathError: If any resulting segment holds invalid characters.
        """
        raw: list[str] = []
        for fragment in fragments:
            if isinstance(fragment, StoragePath):
                raw.extend(fragment._segments)
            elif isinstance(fragment, str):
                raw.append(fragment)
            else:
                raise TypeError(
                    f"StoragePath fragments must be str or StoragePath, not {type(fragment).__name__}"
                )
        self._segments = _normalize(raw)
        self._key = tuple(segment.casefold() for segment in self._segments)

    @classmethod
    def parse(cls, raw: str) -> StoragePath:
        """Normalize a single raw string into a ``StoragePath``."""

        return cls(raw)

    # Derived properties ----------------------------------------------------

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    @property
    def is_absolute(self) -> bool:
        """Return whether the first segment carries a drive marker such as ``C:``."""

        return bool(self._segments) and DRIVE_MARKER in self._segments[0]

    @property
    def name(self) -> str:
        """Return the last segment, or an empty string for the empty path."""

        return self._segments[-1] if self._segments else ""

    @property
    def extension(self) -> str:
        """Return the suffix of the last segment from its last dot, dot included."""

        name = self.name
        index = name.rfind(".")
        return name[index:] if index >= 0 else ""

    @property
    def has_extension(self) -> bool:
        return "." in self.name

    @property
    def name_without_extension(self) -> str:
        name = self.name
        index = name.rfind(".")
        return name[:index] if index >= 0 else name

    @property
    def parent(self) -> StoragePath:
        """Return the containing directory (``get_nth_parent(1)``)."""

        return self.get_nth_parent(1)

    # Combination -----------------------------------------------------------

    def combine(self, *others: str | StoragePath) -> StoragePath:
        """Append ``others`` to this path and re-run normalization.

        Args:
            *others: Raw strings or paths to append, in order.

        Returns:
            StoragePath: The combined path.

        Raises:
            ArgumentError: If an appended operand is absolute. Absolute operands
                are only accepted onto the empty path.
        """
        result = self
        for other in others:
            operand = other if isinstance(other, StoragePath) else StoragePath(other)
            if operand.is_absolute and result._segments:
                raise ArgumentError(
                    f"Cannot append absolute path '{operand}' to '{result}'"
                )
            result = StoragePath(result, operand)
        return result

    def __truediv__(self, other: str | StoragePath) -> StoragePath:
        if not isinstance(other, (str, StoragePath)):
            return NotImplemented
        return self.combine(other)

    def __rtruediv__(self, other: str) -> StoragePath:
        if not isinstance(other, str):
            return NotImplemented
        return StoragePath(other).combine(self)

    def get_nth_parent(self, count: int) -> StoragePath:
        """Ascend ``count`` levels by appending literal ``..`` segments.

        Raises:
            ArgumentError: If ``count`` is negative.
            InvalidOperationError: If the path is absolute and ascending would
                remove the drive marker.
        """
        if count < 0:
            raise ArgumentError(f"Parent count must be non-negative, got {count}")
        if self.is_absolute and count >= len(self._segments):
            raise InvalidOperationError(
                f"Attempted to remove too many segments from absolute path '{self}'"
            )
        return StoragePath(self, *([PARENT_SEGMENT] * count))

    def set_extension(self, extension: str | None) -> StoragePath:
        """Replace or add the extension of the last segment.

        Args:
            extension: New extension with or without its leading dot. ``None``
                leaves the path unchanged.
        """
        if extension is None:
            return self
        if not extension.startswith("."):
            extension = "." + extension

        if not self._segments:
            return StoragePath(extension)
        return StoragePath(*self._segments[:-1], self.name_without_extension + extension)

    def scope_to_name(self) -> StoragePath:
        return StoragePath(self.name)

    def scope_to_name_without_extension(self) -> StoragePath:
        return StoragePath(self.name_without_extension)

    # Rendering -------------------------------------------------------------

    def render(
        self,
        separator: PathSeparator = CANONICAL_SEPARATOR,
        leading_slash: bool = False,
        trailing_slash: bool = False,
    ) -> str:
        """Join segments with ``separator``.

        Args:
            separator: Character placed between segments.
            leading_slash: Prefix a separator unless the path is absolute.
            trailing_slash: Suffix a separator unconditionally.
        """
        char = separator.value
        rendered = char.join(self._segments)
        if leading_slash and not self.is_absolute:
            rendered = char + rendered
        if trailing_slash:
            rendered += char
        return rendered

    def as_posix(self) -> str:
        return self.render(PathSeparator.FORWARD_SLASH)

    def to_native(self) -> Path:
        """Return a ``pathlib.Path`` holding the same segments.

        Drive-marked paths keep their drive as the anchor so the result stays
        absolute on Windows hosts.
        """
        if not self._segments:
            return Path()
        if self.is_absolute:
            return Path(self._segments[0] + os.sep, *self._segments[1:])
        return Path(*self._segments)

    def __str__(self) -> str:
        return self.render(self.DEFAULT_SEPARATOR)

    def __repr__(self) -> str:
        return f"StoragePath({self.as_posix()!r})"

    # Comparison ------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoragePath):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, StoragePath):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)


def as_storage_path(value: str | StoragePath) -> StoragePath:
    """Return ``value`` unchanged when it is already a ``StoragePath``."""

    if isinstance(value, StoragePath):
        return value
    return StoragePath.parse(value)


__all__ = [
    "StoragePath",
    "as_storage_path",
    "INVALID_PATH_CHARACTERS",
    "INVALID_FILE_NAME_CHARACTERS",
    "DRIVE_MARKER",
]
