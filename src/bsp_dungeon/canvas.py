from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

from .geometry import Point, Rect
from .tiles import TileRole

logger = logging.getLogger(__name__)


class TileCanvas(Protocol):
    """Protocol for the grid surface the generator paints onto.

    The generator only ever needs point reads and writes plus a full clear, so
    any host grid (a game engine tilemap, a test double) can be adapted.
    """

    def get(self, x: int, y: int) -> Optional[TileRole]:
        ...

    def set(self, x: int, y: int, tile: TileRole) -> None:
        ...

    def clear_all(self) -> None:
        ...


class GridCanvas:
    """A bounds-checked in-memory tile canvas.

    Coordinates are (x, y) with (0,0) at top-left; x grows to the right, y grows
    down. Empty cells hold ``None``. Any access outside the grid raises
    ``IndexError`` so generation bugs surface immediately instead of being
    silently clipped.
    """

    __slots__ = ("_w", "_h", "_tiles")

    def __init__(self, width: int, height: Optional[int] = None) -> None:
        if height is None:
            height = width
        if width <= 0 or height <= 0:
            raise ValueError("GridCanvas dimensions must be positive")
        self._w = int(width)
        self._h = int(height)
        self._tiles: Dict[Tuple[int, int], TileRole] = {}
        logger.debug("Initialized GridCanvas %dx%d", self._w, self._h)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def bounds(self) -> Rect:
        return Rect(0, 0, self._w, self._h)

    def is_within(self, x: int, y: int) -> bool:
        """Check if coordinates are within the grid bounds. Never raises."""
        return 0 <= x < self._w and 0 <= y < self._h

    def _check(self, x: int, y: int) -> None:
        if not self.is_within(x, y):
            raise IndexError(f"Coordinates out of bounds: ({x}, {y}) for canvas {self._w}x{self._h}")

    def get(self, x: int, y: int) -> Optional[TileRole]:
        self._check(x, y)
        return self._tiles.get((x, y))

    def set(self, x: int, y: int, tile: TileRole) -> None:
        if not isinstance(tile, TileRole):
            raise TypeError("tile must be a TileRole enum member")
        self._check(x, y)
        self._tiles[(x, y)] = tile

    def clear_all(self) -> None:
        self._tiles.clear()

    def fill_rect(self, rect: Rect, tile: TileRole) -> None:
        for cell in rect.cells():
            self.set(cell.x, cell.y, tile)

    def filled_cells(self) -> Iterator[Point]:
        """Yield every non-empty cell in row-major order."""
        for key in sorted(self._tiles, key=lambda c: (c[1], c[0])):
            yield Point(*key)

    def count(self) -> int:
        return len(self._tiles)

    def to_lines(self, empty: str = " ") -> List[str]:
        """Convert the canvas to an ASCII representation (for debugging/testing)."""
        rows: List[str] = []
        for y in range(self._h):
            row = []
            for x in range(self._w):
                tile = self._tiles.get((x, y))
                row.append(empty if tile is None else tile.glyph)
            rows.append("".join(row))
        return rows

    def snapshot(self) -> Tuple[Tuple[Optional[str], ...], ...]:
        """Deterministic, hashable snapshot of the tiles for equality tests."""
        return tuple(
            tuple(
                None if self._tiles.get((x, y)) is None else self._tiles[(x, y)].value
                for x in range(self._w)
            )
            for y in range(self._h)
        )

    def __repr__(self) -> str:
        return f"GridCanvas(width={self._w}, height={self._h}, filled={len(self._tiles)})"


__all__ = ["TileCanvas", "GridCanvas"]
