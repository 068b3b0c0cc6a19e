"""Conflict resolution applied to each staged file write."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from dirbuilder.shared.conflict_policy import ConflictPolicy
from dirbuilder.shared.errors import ConflictError

_COUNTER_SUFFIX: Final[re.Pattern[str]] = re.compile(r"\s\(\d+\)$")


class WriteAction(str, Enum):
    """Outcome of checking one destination against the active policy."""

    WRITE = "write"
    OVERWRITE = "overwrite"
    SKIP = "skip"
    RENAME = "rename"


@dataclass(slots=True, frozen=True)
class WriteDecision:
    """Where (and whether) a staged file should be written."""

    action: WriteAction
    path: Path


def find_available_path(target_path: Path, *, exists: Callable[[Path], bool]) -> Path:
    """Find an available file path by appending `` (N)`` before the extension.

    A counter already present on the stem is dropped first, so ``out (1).txt``
    continues the ``out (N).txt`` sequence instead of nesting counters.
    """
    if not exists(target_path):
        return target_path

    parent = target_path.parent
    stem = _COUNTER_SUFFIX.sub("", target_path.stem)
    extension = target_path.suffix
    counter = 1

    while True:
        candidate = parent / f"{stem} ({counter}){extension}"
        if not exists(candidate):
            return candidate
        counter += 1


def decide_write(
    target_path: Path,
    policy: ConflictPolicy,
    *,
    exists: Callable[[Path], bool],
) -> WriteDecision:
    """Apply ``policy`` to ``target_path``.

    Raises:
        ConflictError: If the destination exists under ``THROW_ON_CONFLICT``.
    """
    if not exists(target_path):
        return WriteDecision(WriteAction.WRITE, target_path)

    if policy is ConflictPolicy.THROW_ON_CONFLICT:
        raise ConflictError(target_path)
    if policy is ConflictPolicy.SKIP:
        return WriteDecision(WriteAction.SKIP, target_path)
    if policy is ConflictPolicy.RENAME:
        return WriteDecision(
            WriteAction.RENAME,
            find_available_path(target_path, exists=exists),
        )
    return WriteDecision(WriteAction.OVERWRITE, target_path)


__all__ = ["WriteAction", "WriteDecision", "decide_write", "find_available_path"]
