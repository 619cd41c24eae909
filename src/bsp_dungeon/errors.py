from __future__ import annotations

from typing import List, Optional

from .geometry import Rect


class DungeonError(Exception):
    """Base class for every error raised while generating a dungeon."""

    def to_human(self) -> str:
        return str(self)


class ConfigurationError(DungeonError, ValueError):
    """Raised when generation settings fall outside their documented ranges.

    All problems found in a single validation pass are collected in ``problems``
    so the caller sees every bad field at once instead of fixing them one by one.
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        super().__init__(message)
        self.problems = list(problems or [])

    def to_human(self) -> str:
        parts = [str(self)]
        for problem in self.problems:
            parts.append(f" - {problem}")
        return "\n".join(parts)


class DegenerateGeometryError(DungeonError):
    """Raised when a split or inset cannot produce a positive-size rectangle."""

    def __init__(self, message: str, rect: Optional[Rect] = None, attempts: int = 0):
        super().__init__(message)
        self.rect = rect
        self.attempts = attempts

    def to_human(self) -> str:
        if self.rect is None:
            return str(self)
        return f"{self} (rect={self.rect}, attempts={self.attempts})"


__all__ = ["DungeonError", "ConfigurationError", "DegenerateGeometryError"]
