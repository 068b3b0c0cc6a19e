"""Logger bootstrap for dirbuilder.

Where: platform/logging/config.py
What: Build the shared ``dirbuilder`` logger with a Rich console handler and an optional rotating file.
Why: Keep handler rendering in handlers.py so this module only wires levels and sinks.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final

from rich.console import Console

from dirbuilder.config.paths import default_log_file
from dirbuilder.platform.filesystem import ensure_parent_directory

from .handlers import BuildEventRichHandler

LOGGER_NAME: Final[str] = "dirbuilder"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()

_FILE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_MAX_LOG_BYTES: Final[int] = 10 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 5


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    target = Path(log_file).expanduser().resolve()
    _ = ensure_parent_directory(target)
    handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """(Re)configure the ``dirbuilder`` logger.

    Existing handlers are closed and replaced, so calling this again swaps
    sinks instead of stacking them.

    Args:
        log_file: Optional log file; ``None`` keeps output on the console only.
        console_level: Minimum level shown on the Rich console.
        file_level: Minimum level written to ``log_file``.

    Returns:
        logging.Logger: The configured shared logger.
    """
    configured = logging.getLogger(LOGGER_NAME)
    configured.setLevel(logging.DEBUG)

    for handler in list(configured.handlers):
        configured.removeHandler(handler)
        handler.close()

    console_handler = BuildEventRichHandler(
        console=Console(force_terminal=True, soft_wrap=True)
    )
    console_handler.setLevel(console_level)
    configured.addHandler(console_handler)

    if log_file is not None:
        configured.addHandler(_file_handler(log_file, file_level))

    return configured


# Console only at import; callers opt into DEFAULT_LOG_FILE explicitly.
logger: Final[logging.Logger] = setup_logger()


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "setup_logger", "logger"]
