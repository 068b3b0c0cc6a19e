"""Tests for per-write conflict decisions and rename candidate selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from dirbuilder.features.builder.usecases.conflicts import (
    WriteAction,
    decide_write,
    find_available_path,
)
from dirbuilder.shared.conflict_policy import ConflictPolicy
from dirbuilder.shared.errors import ConflictError


def _exists_in(*paths: str):
    existing = {Path(path) for path in paths}
    return lambda candidate: candidate in existing


def test_find_available_path_returns_target_when_free() -> None:
    assert find_available_path(Path("out/a.txt"), exists=_exists_in()) == Path("out/a.txt")


def test_find_available_path_counts_up_from_one() -> None:
    exists = _exists_in("out/a.txt", "out/a (1).txt", "out/a (2).txt")

    assert find_available_path(Path("out/a.txt"), exists=exists) == Path("out/a (3).txt")


def test_find_available_path_restarts_existing_counter() -> None:
    exists = _exists_in("a (1).txt", "a (2).txt")

    assert find_available_path(Path("a (1).txt"), exists=exists) == Path("a (3).txt")


def test_find_available_path_without_extension() -> None:
    assert find_available_path(Path("README"), exists=_exists_in("README")) == Path("README (1)")


@pytest.mark.parametrize(
    ("policy", "action", "path"),
    [
        (ConflictPolicy.OVERWRITE, WriteAction.OVERWRITE, Path("a.txt")),
        (ConflictPolicy.SKIP, WriteAction.SKIP, Path("a.txt")),
        (ConflictPolicy.RENAME, WriteAction.RENAME, Path("a (1).txt")),
    ],
)
def test_decide_write_on_existing_destination(
    policy: ConflictPolicy, action: WriteAction, path: Path
) -> None:
    decision = decide_write(Path("a.txt"), policy, exists=_exists_in("a.txt"))

    assert decision.action is action
    assert decision.path == path


def test_decide_write_throws_with_destination() -> None:
    with pytest.raises(ConflictError) as excinfo:
        _ = decide_write(Path("a.txt"), ConflictPolicy.THROW_ON_CONFLICT, exists=_exists_in("a.txt"))

    assert excinfo.value.destination == Path("a.txt")
    assert "a.txt" in str(excinfo.value)


def test_decide_write_ignores_policy_when_free() -> None:
    for policy in ConflictPolicy:
        decision = decide_write(Path("free.txt"), policy, exists=_exists_in())
        assert decision.action is WriteAction.WRITE
