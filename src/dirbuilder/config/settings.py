"""Where: src/dirbuilder/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dirbuilder.config.config import config as app_config
from dirbuilder.platform.logging import setup_logger
from dirbuilder.shared.conflict_policy import ConflictPolicy

# Policy used by DirectoryBuilder when none is passed explicitly.
DEFAULT_CONFLICT_POLICY: ConflictPolicy = app_config.default_conflict_policy

LOG_FILE: Path | None = app_config.log_file
CONSOLE_LEVEL: int = app_config.console_level_value


def apply_logging_settings() -> logging.Logger:
    """Reconfigure the shared logger from the loaded configuration."""

    return setup_logger(log_file=LOG_FILE, console_level=CONSOLE_LEVEL)


__all__ = [
    "DEFAULT_CONFLICT_POLICY",
    "LOG_FILE",
    "CONSOLE_LEVEL",
    "apply_logging_settings",
]
