"""Rich console handler rendering directory build events."""

from __future__ import annotations

import logging
import sys
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, Final

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text

_ELLIPSIS: Final[str] = "…"
_SEPARATOR_STYLE: Final[Style] = Style(color="magenta")
_SEGMENT_STYLE: Final[Style] = Style(color="white")
_COMPLETE_METRICS: Final[tuple[str, ...]] = (
    "written",
    "renamed",
    "skipped",
    "deleted",
    "directories",
)


def _pure(raw: str) -> PurePath:
    """Pick the path flavour from the separators ``raw`` actually uses."""

    return PureWindowsPath(raw) if "\\" in raw else PurePosixPath(raw)


class BuildEventRichHandler(RichHandler):
    """Rich handler that styles builder events and compacts their paths.

    Records without a ``build_event`` extra fall through to the stock
    ``RichHandler`` rendering.
    """

    # event -> (icon, colour, verb shown before the target path)
    _EVENTS: ClassVar[dict[str, tuple[str, str, str]]] = {
        "build.start": ("🚀", "cyan", "Build start"),
        "build.complete": ("✅", "green", "Build complete"),
        "build.error": ("❌", "red", "Build failed"),
        "build.delete": ("🗑️", "yellow", "Deleted "),
        "build.directory": ("📁", "blue", "Created directory "),
        "build.write": ("📄", "magenta", "Wrote "),
        "build.skip": ("↪️", "yellow", "Skipped existing "),
        "build.rename": ("✏️", "cyan", "Renamed "),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.update(
            show_time=False,
            show_path=False,
            show_level=False,
            rich_tracebacks=True,
            markup=True,
            omit_repeated_times=False,
        )
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Render ``path`` relative to ``base`` when it lies beneath it.

        Only the last ``_PATH_SEGMENT_LIMIT`` segments are kept; dropped
        leading segments are shown as an ellipsis.
        """
        shown = _pure(path)
        if base:
            root = _pure(base)
            if type(root) is type(shown) and shown != root and shown.is_relative_to(root):
                shown = shown.relative_to(root)

        sep = "\\" if isinstance(shown, PureWindowsPath) else "/"
        anchor = shown.anchor
        segments = [part for part in shown.parts if part and part != anchor]

        head = anchor.rstrip("\\/") + sep if anchor else ""
        if len(segments) > self._PATH_SEGMENT_LIMIT:
            segments = segments[-self._PATH_SEGMENT_LIMIT :]
            head += _ELLIPSIS + sep

        rendered = Text()
        for char in (head + sep.join(segments)) or ".":
            style = _SEPARATOR_STYLE if char in (sep, _ELLIPSIS) else _SEGMENT_STYLE
            _ = rendered.append(char, style=style)
        return rendered

    def _describe(self, event: str, record: logging.LogRecord, body: Text, verb: str) -> None:
        _ = body.append(verb)
        base = getattr(record, "target_base_path", None)
        base_str = str(base) if base else None

        if event == "build.start":
            pending = getattr(record, "pending", None)
            if isinstance(pending, int):
                _ = body.append(f" [pending={pending}]")
            if base_str:
                _ = body.append(" @ ")
                _ = body.append_text(self._format_path(base_str))
            return

        if event == "build.complete":
            metrics: list[str] = []
            for key in _COMPLETE_METRICS:
                value = getattr(record, key, None)
                if isinstance(value, int):
                    metrics.append(f"{key}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
            if metrics:
                _ = body.append(f" [{', '.join(metrics)}]")
            return

        if event == "build.error":
            error = getattr(record, "error_message", None)
            if error:
                _ = body.append(f" ({error})")
            return

        source = getattr(record, "source_path", None)
        target = getattr(record, "target_path", None)
        if source:
            _ = body.append_text(self._format_path(str(source), base=base_str))
            _ = body.append(" → ")
        if target:
            _ = body.append_text(self._format_path(str(target), base=base_str))

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        event = getattr(record, "build_event", None)
        if not isinstance(event, str):
            return super().render_message(record, message)

        icon, color, verb = self._EVENTS.get(event, ("ℹ️", "blue", ""))
        line = Text()
        _ = line.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))
        self._describe(event, record, body, verb)
        _ = line.append_text(body)
        return line


__all__ = ["BuildEventRichHandler"]
