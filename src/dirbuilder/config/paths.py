"""Locations of the dirbuilder config file and log file.

Both live beside the checkout so a clone is self-contained:
- ``<repo_root>/config/dirbuilder.toml``, overridable with
  ``DIRBUILDER_CONFIG_PATH`` or an explicit path.
- ``<repo_root>/logs/dirbuilder.log``.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Final

CONFIG_PATH_ENV: Final[str] = "DIRBUILDER_CONFIG_PATH"
CONFIG_FILE_NAME: Final[str] = "dirbuilder.toml"
LOG_FILE_NAME: Final[str] = "dirbuilder.log"

_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def _absolute(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Pick a path from, in order: ``explicit_path``, ``env[env_var]``, the default.

    Blank environment values are ignored. ``env`` defaults to ``os.environ``.
    """
    if explicit_path is not None:
        return _absolute(explicit_path)

    environment = os.environ if env is None else env
    override = environment.get(env_var, "").strip() if env_var else ""
    if override:
        return _absolute(override)
    return _absolute(default_factory())


def _detect_repo_root(start: Path | None = None) -> Path:
    """Return the nearest ancestor of ``start`` holding a project marker.

    Falls back to the current working directory for installed copies with no
    marker above them.
    """
    origin = (start or Path(__file__).resolve()).parent
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def default_config_path() -> Path:
    return _absolute(_detect_repo_root() / "config" / CONFIG_FILE_NAME)


def default_log_dir() -> Path:
    return _absolute(_detect_repo_root() / "logs")


def default_log_file() -> Path:
    return default_log_dir() / LOG_FILE_NAME


__all__ = [
    "CONFIG_FILE_NAME",
    "CONFIG_PATH_ENV",
    "LOG_FILE_NAME",
    "default_config_path",
    "default_log_dir",
    "default_log_file",
    "resolve_overridable_path",
]
