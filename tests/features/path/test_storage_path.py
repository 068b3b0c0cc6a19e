"""
Summary: Cover StoragePath normalization, derived properties, combination and rendering.
Why: The builder trusts StoragePath to canonicalize every staged destination.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from dirbuilder.features.path import PathSeparator, StoragePath
from dirbuilder.shared.errors import ArgumentError, InvalidOperationError, InvalidPathError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("a/b/../c", "a\\c"),
        ("../a", "..\\a"),
        ("../../a/..", "..\\.."),
        ("a///b\\\\c", "a\\b\\c"),
        ("////some\\..\\malformed/path\\\\here", "malformed\\path\\here"),
        ("\\\\folder///next\\foo//\\/bar/../file.txt", "folder\\next\\foo\\file.txt"),
        ("a/  /b", "a\\b"),
        ("", ""),
    ],
)
def test_parse_normalizes_separators_and_parent_segments(raw: str, expected: str) -> None:
    """Parsing should collapse separators and resolve ``..`` eagerly."""

    assert str(StoragePath.parse(raw)) == expected


@pytest.mark.parametrize(
    "raw",
    ["a/b/../c", "C:/x/y", "../../up", "dir\\file.tar.gz", "a//b\\c/"],
)
def test_parse_is_idempotent_through_rendering(raw: str) -> None:
    """Re-parsing a rendered path should give back the same path."""

    path = StoragePath.parse(raw)

    assert StoragePath.parse(str(path)) == path
    assert StoragePath.parse(path.as_posix()) == path


def test_parse_rejects_invalid_file_name_characters() -> None:
    """Characters such as ``?`` or ``:`` are only tolerated in the first segment's drive."""

    with pytest.raises(InvalidPathError):
        _ = StoragePath.parse("a/b?c")
    with pytest.raises(InvalidPathError):
        _ = StoragePath.parse("a/C:")
    with pytest.raises(InvalidPathError):
        _ = StoragePath.parse("a|b")


def test_first_segment_may_hold_drive_marker() -> None:
    path = StoragePath.parse("C:/a/b")

    assert path.is_absolute
    assert path.segments == ("C:", "a", "b")
    assert not StoragePath.parse("a/b").is_absolute
    assert not StoragePath().is_absolute


def test_invalid_path_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        _ = StoragePath.parse("bad\x00name")


def test_derived_name_and_extension_properties() -> None:
    path = StoragePath.parse("////some\\malformed/path\\\\here")

    assert path.name == "here"
    assert path.extension == ""
    assert not path.has_extension

    archive = StoragePath.parse("dist/pkg.tar.gz")
    assert archive.name == "pkg.tar.gz"
    assert archive.extension == ".gz"
    assert archive.name_without_extension == "pkg.tar"
    assert archive.has_extension

    assert StoragePath().name == ""
    assert StoragePath().extension == ""


def test_set_extension_replaces_suffix() -> None:
    path = StoragePath.parse("a/b.txt").set_extension("csv")

    assert path.extension == ".csv"
    assert path.name == "b.csv"
    assert path == StoragePath.parse("a/b.txt").set_extension(".csv")


def test_set_extension_adds_suffix_and_handles_edges() -> None:
    path = StoragePath.parse("some/malformed/here").set_extension("txt")

    assert path.name == "here.txt"
    assert path.set_extension(None) is path
    assert StoragePath().set_extension("cfg").segments == (".cfg",)


def test_parent_and_nth_parent() -> None:
    path = StoragePath.parse("C:/some/other/some/malformed/other.txt")

    assert str(path.parent) == "C:\\some\\other\\some\\malformed"
    assert str(path.get_nth_parent(2)) == "C:\\some\\other\\some"
    assert path.get_nth_parent(0) == path
    assert StoragePath.parse("a").parent == StoragePath()
    assert str(StoragePath().parent) == ".."


def test_nth_parent_cannot_ascend_past_drive_root() -> None:
    path = StoragePath.parse("C:/a")

    assert str(path.parent) == "C:"
    with pytest.raises(InvalidOperationError):
        _ = path.get_nth_parent(2)
    with pytest.raises(InvalidOperationError):
        _ = StoragePath.parse("C:").parent


def test_nth_parent_rejects_negative_count() -> None:
    with pytest.raises(ArgumentError):
        _ = StoragePath.parse("a/b").get_nth_parent(-1)


def test_combine_appends_and_renormalizes() -> None:
    base = StoragePath.parse("C:/some/other")

    combined = base.combine("some///malformed\\\\other.some").set_extension(".txt")

    assert str(combined) == "C:\\some\\other\\some\\malformed\\other.txt"
    assert base / "x" / "../y" == StoragePath.parse("C:/some/other/y")
    assert "root" / StoragePath.parse("leaf") == StoragePath.parse("root/leaf")
    assert StoragePath.parse("a/b").combine(StoragePath.parse("../../..")) == StoragePath.parse("..")


def test_combine_rejects_absolute_operand() -> None:
    with pytest.raises(ArgumentError):
        _ = StoragePath.parse("a").combine(StoragePath.parse("C:/b"))
    with pytest.raises(ArgumentError):
        _ = StoragePath.parse("a") / "D:/b"


def test_absolute_operand_may_start_an_empty_path() -> None:
    path = StoragePath().combine("C:/")

    assert str(path) == "C:"
    assert path.is_absolute


def test_render_options() -> None:
    path = StoragePath.parse("////some\\..\\malformed/path\\\\here")

    assert path.render() == "malformed\\path\\here"
    assert path.render(PathSeparator.FORWARD_SLASH, True, True) == "/malformed/path/here/"
    assert path.render(PathSeparator.BACK_SLASH, trailing_slash=True) == "malformed\\path\\here\\"
    assert StoragePath.parse("C:/a").render(PathSeparator.FORWARD_SLASH, leading_slash=True) == "C:/a"


def test_scope_helpers() -> None:
    path = StoragePath.parse("C:/some/other.txt")

    assert str(path.scope_to_name()) == "other.txt"
    assert str(path.scope_to_name_without_extension()) == "other"


def test_equality_and_hash_ignore_case() -> None:
    first = StoragePath.parse("Dir/File.TXT")
    second = StoragePath.parse("dir\\file.txt")

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
    assert first != StoragePath.parse("dir/other.txt")
    assert first != "dir/file.txt"


def test_ordering_is_case_insensitive() -> None:
    paths = [StoragePath.parse("b"), StoragePath.parse("A/z"), StoragePath.parse("a")]

    assert sorted(paths) == [StoragePath.parse("a"), StoragePath.parse("a/z"), StoragePath.parse("B")]


def test_to_native_builds_pathlib_path() -> None:
    assert StoragePath.parse("a\\b/c.txt").to_native() == Path("a", "b", "c.txt")
    assert StoragePath().to_native() == Path()
    assert StoragePath.parse("C:/x").to_native().parts[-1] == "x"


def test_constructor_rejects_unsupported_fragment_types() -> None:
    with pytest.raises(TypeError):
        _ = StoragePath(42)  # pyright: ignore[reportArgumentType]


def test_separator_from_user_input() -> None:
    assert PathSeparator.from_user_input("/") is PathSeparator.FORWARD_SLASH
    assert PathSeparator.from_user_input("back_slash") is PathSeparator.BACK_SLASH
    with pytest.raises(ValueError):
        _ = PathSeparator.from_user_input("|")
