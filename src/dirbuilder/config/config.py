"""Configuration management for dirbuilder."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

from dirbuilder.config.paths import (
    CONFIG_PATH_ENV,
    default_config_path,
    resolve_overridable_path,
)
from dirbuilder.platform.filesystem import ensure_parent_directory
from dirbuilder.platform.logging import logger
from dirbuilder.shared.conflict_policy import ConflictPolicy

_KNOWN_KEYS = frozenset({"default_conflict_policy", "log_file", "console_level"})


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the TOML document cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the parsed document is semantically invalid."""


@dataclass
class Config:
    """Application configuration."""

    # Policy applied when a builder is created without an explicit one
    default_conflict_policy: ConflictPolicy = ConflictPolicy.THROW_ON_CONFLICT

    # Optional log file; console logging is always on
    log_file: Path | None = None

    # Console handler level name
    console_level: str = "INFO"

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        if isinstance(self.default_conflict_policy, str) and not isinstance(
            self.default_conflict_policy, ConflictPolicy
        ):
            try:
                self.default_conflict_policy = ConflictPolicy.from_user_input(
                    self.default_conflict_policy
                )
            except ValueError as exc:
                raise ConfigValidationError(str(exc)) from exc

        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file) if self.log_file.strip() else None

        level = self.console_level.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigValidationError(f"Unknown console_level '{self.console_level}'")
        self.console_level = level

    @property
    def console_level_value(self) -> int:
        return logging.getLevelName(self.console_level)

    def save(self, path: Path | None = None) -> Path:
        """Write the configuration as commented TOML and return the target path."""

        target = path or default_config_path()
        try:
            _ = ensure_parent_directory(target)
            _ = target.write_text(self._render_toml(), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        logger.info("Configuration saved to %s", target)
        return target

    def _render_toml(self) -> str:
        lines: list[str] = []

        lines.append("# dirbuilder configuration file")
        lines.append("")

        lines.append("# Conflict policy used when a builder is created without one")
        lines.append("# One of: overwrite, skip, throw, rename")
        lines.append(
            f"default_conflict_policy = {self._format_toml_value(self.default_conflict_policy.value)}"
        )
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/dirbuilder.log"')
        if self.log_file is not None:
            lines.append(f"log_file = {self._format_toml_value(self.log_file)}")
        lines.append("")

        lines.append("# Console log level (DEBUG, INFO, WARNING, ERROR)")
        lines.append(f"console_level = {self._format_toml_value(self.console_level)}")
        lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _format_toml_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(
        cls, *, path: Path | None = None, env: Mapping[str, str] | None = None
    ) -> "Config":
        """Load configuration from TOML, falling back to defaults when absent.

        Args:
            path: Optional explicit path to the config file.
            env: Optional environment mapping used for ``DIRBUILDER_CONFIG_PATH``.

        Returns:
            Config: Loaded configuration. Calls without overrides are cached.
        """
        use_cache = path is None and env is None
        if use_cache and cls._instance is not None:
            return cls._instance

        config_file = resolve_overridable_path(
            explicit_path=path,
            env=env,
            env_var=CONFIG_PATH_ENV,
            default_factory=default_config_path,
        )

        if config_file.exists():
            try:
                with config_file.open("rb") as handle:
                    document = tomllib.load(handle)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigParseError(f"Invalid TOML in config file: {config_file}") from exc
            except OSError as exc:  # pragma: no cover - rare filesystem failure
                raise ConfigError(f"Failed to read config file: {config_file}") from exc

            unknown = sorted(set(document) - _KNOWN_KEYS)
            if unknown:
                raise ConfigValidationError(f"Unknown configuration keys: {', '.join(unknown)}")
            for key in ("default_conflict_policy", "log_file", "console_level"):
                if key in document and not isinstance(document[key], str):
                    raise ConfigValidationError(f"{key} must be a string")

            instance = cls(**document)
            logger.debug("Configuration loaded from %s", config_file)
        else:
            instance = cls()
            logger.debug("No configuration at %s; using defaults", config_file)

        if use_cache:
            cls._instance = instance
            cls._loaded_from = config_file
        return instance


config = Config.load()


__all__ = [
    "Config",
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "config",
]
