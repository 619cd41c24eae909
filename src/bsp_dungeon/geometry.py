from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple


class Point(NamedTuple):
    x: int
    y: int


class Vec2(NamedTuple):
    """Float pair used for rectangle centres and the corridor cursor."""

    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":  # type: ignore[override]
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Vec2") -> float:
        return (other - self).length()

    def normalized(self) -> "Vec2":
        size = self.length()
        if size == 0:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / size, self.y / size)

    def cell(self) -> Point:
        """Truncate towards zero, matching how fractional draws become cells."""
        return Point(int(self.x), int(self.y))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned integer rectangle. ``x_max``/``y_max`` are exclusive."""

    x: int
    y: int
    width: int
    height: int

    @property
    def x_max(self) -> int:
        return self.x + self.width

    @property
    def y_max(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains_point(self, x: int, y: int) -> bool:
        return self.x <= x < self.x_max and self.y <= y < self.y_max

    def contains_rect(self, other: "Rect") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.x_max <= self.x_max
            and other.y_max <= self.y_max
        )

    def overlaps(self, other: "Rect") -> bool:
        return not (
            self.x_max <= other.x
            or other.x_max <= self.x
            or self.y_max <= other.y
            or other.y_max <= self.y
        )

    def union_bounds(self, other: "Rect") -> "Rect":
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        return Rect(x, y, max(self.x_max, other.x_max) - x, max(self.y_max, other.y_max) - y)

    def cells(self) -> Iterator[Point]:
        """Yield every cell row by row (top to bottom, left to right)."""
        for yy in range(self.y, self.y_max):
            for xx in range(self.x, self.x_max):
                yield Point(xx, yy)


__all__ = ["Point", "Vec2", "Rect"]
