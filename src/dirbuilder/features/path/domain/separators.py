"""Path separator characters understood by ``StoragePath``."""

from __future__ import annotations

from enum import Enum


class PathSeparator(str, Enum):
    """Represent the characters that may separate path segments."""

    FORWARD_SLASH = "/"
    BACK_SLASH = "\\"

    @staticmethod
    def from_user_input(value: str) -> "PathSeparator":
        """Translate a raw separator or its name into the matching member."""

        normalized = value.strip()
        for separator in PathSeparator:
            if normalized == separator.value or normalized.lower() == separator.name.lower():
                return separator
        valid = ", ".join(s.name.lower() for s in PathSeparator)
        msg = f"Unsupported path separator '{value}'. Valid options: {valid}"
        raise ValueError(msg)


CANONICAL_SEPARATOR = PathSeparator.BACK_SLASH
ALTERNATE_SEPARATOR = PathSeparator.FORWARD_SLASH


__all__ = ["PathSeparator", "CANONICAL_SEPARATOR", "ALTERNATE_SEPARATOR"]
