"""
Autotiling of carved cells.

After rooms and corridors are stamped onto the canvas as ``FILLED``, every
occupied cell is given one of nine positional roles based on which of its
neighbours are occupied. Only occupancy matters, so the pass is idempotent:
classifying a cell that already carries a role gives the same role again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .canvas import TileCanvas
from .geometry import Rect
from .tiles import TileRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neighbourhood:
    """Occupancy of a cell and its 8 neighbours (screen coordinates, y down)."""

    centre: bool
    left: bool
    right: bool
    up: bool
    down: bool
    up_left: bool = False
    up_right: bool = False
    down_left: bool = False
    down_right: bool = False


Rule = Tuple[Callable[[Neighbourhood], bool], TileRole]

# Ordered; the first matching rule wins, corners before edges.
RULES: Sequence[Rule] = (
    (lambda n: not n.up and not n.left, TileRole.TOP_LEFT),
    (lambda n: not n.up and not n.right, TileRole.TOP_RIGHT),
    (lambda n: not n.down and not n.left, TileRole.BOTTOM_LEFT),
    (lambda n: not n.down and not n.right, TileRole.BOTTOM_RIGHT),
    (lambda n: not n.up, TileRole.TOP_MID),
    (lambda n: not n.down, TileRole.BOTTOM_MID),
    (lambda n: not n.left, TileRole.MID_LEFT),
    (lambda n: not n.right, TileRole.MID_RIGHT),
)
DEFAULT_ROLE = TileRole.INTERIOR


def role_for(neighbourhood: Neighbourhood) -> Optional[TileRole]:
    """Apply the ordered rules to a neighbourhood. Empty cells get no role."""
    if not neighbourhood.centre:
        return None
    for matches, role in RULES:
        if matches(neighbourhood):
            return role
    return DEFAULT_ROLE


class TileClassifier:
    """Reads canvas occupancy and assigns positional roles.

    Cells outside ``bounds`` are treated as empty and are never read, so the
    classifier is safe at the edges of a bounds-checked canvas.
    """

    def __init__(self, canvas: TileCanvas, bounds: Rect) -> None:
        self.canvas = canvas
        self.bounds = bounds

    def is_filled(self, x: int, y: int) -> bool:
        if not self.bounds.contains_point(x, y):
            return False
        return self.canvas.get(x, y) is not None

    def neighbourhood(self, x: int, y: int) -> Neighbourhood:
        f = self.is_filled
        return Neighbourhood(
            centre=f(x, y),
            left=f(x - 1, y),
            right=f(x + 1, y),
            up=f(x, y - 1),
            down=f(x, y + 1),
            up_left=f(x - 1, y - 1),
            up_right=f(x + 1, y - 1),
            down_left=f(x - 1, y + 1),
            down_right=f(x + 1, y + 1),
        )

    def classify(self, x: int, y: int) -> Optional[TileRole]:
        return role_for(self.neighbourhood(x, y))

    def repaint(self, region: Optional[Rect] = None, margin: int = 0) -> int:
        """Classify every cell of ``region`` and write the role back.

        The first ``margin`` rows and columns on the low side are skipped. Cells
        that classify as empty are left untouched; the pass never clears.

        Returns:
            Number of cells painted.
        """
        region = region or self.bounds
        painted = 0
        for y in range(region.y + margin, region.y_max):
            for x in range(region.x + margin, region.x_max):
                role = self.classify(x, y)
                if role is None:
                    continue
                self.canvas.set(x, y, role)
                painted += 1
        logger.debug("Repainted %d cells in %s (margin=%d)", painted, region, margin)
        return painted


__all__ = ["Neighbourhood", "RULES", "DEFAULT_ROLE", "TileClassifier", "role_for"]
