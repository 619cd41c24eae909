from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Set

from .canvas import TileCanvas
from .geometry import Point, Rect, Vec2
from .partition import PartitionNode
from .tiles import TileRole

logger = logging.getLogger(__name__)


def is_axis_aligned(direction: Vec2) -> bool:
    return (direction.x == 0) != (direction.y == 0)


def band(cursor: Vec2, direction: Vec2, thickness: int) -> Iterator[Point]:
    """Cells covered by the corridor at one cursor position.

    The band runs perpendicular to travel: horizontal travel covers
    ``thickness`` rows downward from the cursor, vertical travel covers
    ``thickness`` columns rightward.
    """
    cell = cursor.cell()
    if direction.y == 0:
        for k in range(thickness):
            yield Point(cell.x, cell.y + k)
    else:
        for k in range(thickness):
            yield Point(cell.x + k, cell.y)


def walk_straight(start: Vec2, end: Vec2, thickness: int) -> List[Point]:
    """Walk from ``start`` towards ``end`` in unit steps along a single axis.

    Stops once the remaining distance is at most one cell. Returns the covered
    cells in walking order without duplicates.
    """
    direction = (end - start).normalized()
    if direction == Vec2(0.0, 0.0):
        return []
    if not is_axis_aligned(direction):
        raise ValueError(f"walk_straight needs an axis-aligned segment, got {start} -> {end}")

    cells: List[Point] = []
    seen: Set[Point] = set()
    cursor = start
    while cursor.distance_to(end) > 1:
        for cell in band(cursor, direction, thickness):
            if cell not in seen:
                seen.add(cell)
                cells.append(cell)
        cursor = cursor + direction
    return cells


def corridor_cells(start: Vec2, end: Vec2, thickness: int) -> List[Point]:
    """Cells of a corridor from ``start`` to ``end``.

    Axis-aligned endpoints get a single straight walk. Anything else is routed
    as an L: along x to the elbow ``(end.x, start.y)``, then along y. The first
    leg aims one step past the elbow so the walk's early stop leaves no gap
    before the second leg.
    """
    direction = (end - start).normalized()
    if direction == Vec2(0.0, 0.0) or is_axis_aligned(direction):
        return walk_straight(start, end, thickness)

    elbow = Vec2(end.x, start.y)
    cells = walk_straight(start, elbow + (elbow - start).normalized(), thickness)
    seen = set(cells)
    for cell in walk_straight(elbow, end, thickness):
        if cell not in seen:
            seen.add(cell)
            cells.append(cell)
    return cells


class CorridorRouter:
    """Connects sibling containers of a partition tree with corridors.

    Every internal node gets one corridor between the centres of its two child
    containers; the router then recurses so deeper siblings are joined too.
    Cells outside ``bounds`` are skipped, never written.
    """

    def __init__(self, canvas: TileCanvas, thickness: int, bounds: Rect) -> None:
        if thickness < 1:
            raise ValueError(f"Corridor thickness must be positive, got {thickness}")
        self.canvas = canvas
        self.thickness = thickness
        self.bounds = bounds

    def connect(self, start: Vec2, end: Vec2) -> Set[Point]:
        carved: Set[Point] = set()
        for cell in corridor_cells(start, end, self.thickness):
            if not self.bounds.contains_point(cell.x, cell.y):
                continue
            self.canvas.set(cell.x, cell.y, TileRole.FILLED)
            carved.add(cell)
        return carved

    def route(self, node: PartitionNode, carved: Optional[Set[Point]] = None) -> Set[Point]:
        """Route corridors for ``node`` and its descendants.

        Returns every cell marked along the way.
        """
        if carved is None:
            carved = set()
        if node.is_leaf():
            return carved

        left, right = node.children or ()
        cells = self.connect(left.container.center, right.container.center)
        logger.debug(
            "Corridor %s -> %s: %d cells",
            left.container.center,
            right.container.center,
            len(cells),
        )
        carved |= cells
        self.route(left, carved)
        self.route(right, carved)
        return carved


def route_corridors(node: PartitionNode, canvas: TileCanvas, thickness: int, bounds: Rect) -> Set[Point]:
    return CorridorRouter(canvas, thickness, bounds).route(node)


__all__ = [
    "CorridorRouter",
    "band",
    "corridor_cells",
    "is_axis_aligned",
    "route_corridors",
    "walk_straight",
]
