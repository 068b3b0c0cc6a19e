"""Tests for the ``BuildEventRichHandler`` event rendering and path formatting."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from rich.console import Console
from rich.text import Text

from dirbuilder.platform.logging import BuildEventRichHandler


def _make_handler() -> BuildEventRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return BuildEventRichHandler(console=console)


def _build_record(**extras: Any) -> logging.LogRecord:
    """Create a ``LogRecord`` populated with build extras for testing."""

    record = logging.LogRecord(
        name="dirbuilder",
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg="plain message",
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_render_message_relativizes_paths_to_build_root() -> None:
    """Targets beneath the build root should render as relative segments."""

    handler = _make_handler()
    base = "/srv/builds/site"

    record = _build_record(
        build_event="build.write",
        target_path=f"{base}/assets/css/main.css",
        target_base_path=base,
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "Wrote assets/css/main.css" in plain
    assert "/srv/builds" not in plain


def test_render_message_truncates_long_paths() -> None:
    handler = _make_handler()

    record = _build_record(
        build_event="build.directory",
        target_path="/var/data/one/two/three/four/five",
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)
    assert "…/two/three/four/five" in rendered.plain


def test_render_message_shows_rename_source_and_target() -> None:
    """Windows-style paths should keep backslash separators when relativized."""

    handler = _make_handler()
    base = "D:\\out"

    record = _build_record(
        build_event="build.rename",
        source_path="D:\\out\\docs\\a.txt",
        target_path="D:\\out\\docs\\a (1).txt",
        target_base_path=base,
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "docs\\a.txt → docs\\a (1).txt" in plain
    assert "D:\\out" not in plain


def test_render_message_summarizes_completion_metrics() -> None:
    handler = _make_handler()

    record = _build_record(
        build_event="build.complete",
        written=3,
        renamed=1,
        skipped=0,
        deleted=2,
        directories=4,
        duration_seconds=0.5,
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)
    assert (
        "Build complete [written=3, renamed=1, skipped=0, deleted=2, directories=4, duration=0.50s]"
        in rendered.plain
    )


def test_render_message_reports_errors() -> None:
    handler = _make_handler()

    record = _build_record(build_event="build.error", error_message="boom")

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)
    assert "Build failed (boom)" in rendered.plain


def test_render_message_falls_back_for_plain_records() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(), "plain message")

    assert isinstance(rendered, Text)
    assert rendered.plain == "plain message"
