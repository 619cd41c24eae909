from __future__ import annotations

import logging
from typing import List

from .errors import DegenerateGeometryError
from .geometry import Rect
from .partition import PartitionNode
from .rng import RandomLike

logger = logging.getLogger(__name__)

# Upper bound (exclusive) of the inset is extent // INSET_DIVISOR.
INSET_DIVISOR = 4
SHRINK_FACTOR_MIN = 1.0
SHRINK_FACTOR_MAX = 2.0


def min_container_extent(min_inset: int) -> int:
    """Smallest side that still holds a room inset by ``min_inset``.

    The shrink never exceeds ``2 * inset - 1`` cells, so ``2 * min_inset``
    leaves at least one.
    """
    return 2 * min_inset


def carve_room(container: Rect, min_inset: int, rng: RandomLike) -> Rect:
    """Carve one room inside ``container``.

    Draw order is x offset, y offset, width factor, height factor, which keeps
    layouts stable for a given seed.
    """
    if container.is_degenerate():
        raise DegenerateGeometryError("Cannot carve a room in an empty container", rect=container)
    if min(container.width, container.height) < min_container_extent(min_inset):
        raise DegenerateGeometryError(
            f"Container is too small for a room inset of {min_inset}", rect=container
        )

    dx = rng.randrange(min_inset, container.width // INSET_DIVISOR)
    dy = rng.randrange(min_inset, container.height // INSET_DIVISOR)
    shrink_x = int(dx * rng.uniform(SHRINK_FACTOR_MIN, SHRINK_FACTOR_MAX))
    shrink_y = int(dy * rng.uniform(SHRINK_FACTOR_MIN, SHRINK_FACTOR_MAX))

    room = Rect(
        container.x + dx,
        container.y + dy,
        container.width - shrink_x,
        container.height - shrink_y,
    )
    if room.is_degenerate() or not container.contains_rect(room):
        raise DegenerateGeometryError("Room carving produced an invalid rectangle", rect=room)
    return room


def carve_rooms(node: PartitionNode, rng: RandomLike, min_inset: int) -> List[Rect]:
    """Depth-first: assign a room to every leaf and return them left to right.

    Internal nodes are skipped and keep ``room`` unset.
    """
    rooms: List[Rect] = []
    if node.is_leaf():
        node.room = carve_room(node.container, min_inset, rng)
        logger.debug("Carved room %s in %s", node.room, node.container)
        rooms.append(node.room)
        return rooms

    for child in node.children or ():
        rooms.extend(carve_rooms(child, rng, min_inset))
    return rooms


__all__ = ["carve_room", "carve_rooms", "min_container_extent", "INSET_DIVISOR"]
