"""Strategies for resolving a file-already-exists condition at build time."""

from __future__ import annotations

from enum import Enum
from typing import Final


class ConflictPolicy(str, Enum):
    """Represent how to handle a staged file whose destination already exists."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    THROW_ON_CONFLICT = "throw"
    RENAME = "rename"

    @staticmethod
    def from_user_input(value: str) -> "ConflictPolicy":
        """Translate raw configuration or CLI input into the matching policy."""

        normalized = value.strip().lower().replace("-", "_")
        for policy in ConflictPolicy:
            if normalized in (policy.value, policy.name.lower()):
                return policy
        valid: Final[str] = ", ".join(p.value for p in ConflictPolicy)
        msg = f"Unsupported conflict policy '{value}'. Valid options: {valid}"
        raise ValueError(msg)


__all__ = ["ConflictPolicy"]
