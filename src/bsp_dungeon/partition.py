"""
Binary space partitioning of the dungeon extent.

A tree is split to an exact depth: every branch reaches a leaf when the
remaining depth hits zero, and every internal node has exactly two children
whose containers tile the parent with no gap and no overlap.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .errors import DegenerateGeometryError
from .geometry import Rect
from .rng import RandomLike

logger = logging.getLogger(__name__)

# The first child receives a share of the cut axis drawn from [MIN, MAX).
SPLIT_FRACTION_MIN = 0.3
SPLIT_FRACTION_MAX = 0.5
DEFAULT_MAX_ATTEMPTS = 32


@dataclass
class PartitionNode:
    container: Rect
    room: Optional[Rect] = None
    children: Optional[Tuple["PartitionNode", "PartitionNode"]] = None

    def is_leaf(self) -> bool:
        return self.children is None

    def is_internal(self) -> bool:
        return self.children is not None

    @property
    def left(self) -> Optional["PartitionNode"]:
        return None if self.children is None else self.children[0]

    @property
    def right(self) -> Optional["PartitionNode"]:
        return None if self.children is None else self.children[1]

    def leaves(self) -> Iterator["PartitionNode"]:
        """Yield leaves left to right."""
        if self.children is None:
            yield self
            return
        for child in self.children:
            yield from child.leaves()


def _draw_cut(extent: int, rng: RandomLike) -> int:
    low = extent * SPLIT_FRACTION_MIN
    high = extent * SPLIT_FRACTION_MAX
    return int(low + rng.random() * (high - low))


def splittable_extent(min_extent: int = 1) -> int:
    """Smallest extent whose every cut leaves both halves at least ``min_extent`` wide."""
    extent = min_extent
    while int(extent * SPLIT_FRACTION_MIN) < min_extent:
        extent += 1
    return extent


def guaranteed_cuts(extent: int, min_extent: int = 1) -> int:
    """Cuts one axis of ``extent`` can always take, even at the smallest fraction."""
    threshold = splittable_extent(min_extent)
    cuts = 0
    while extent >= threshold:
        extent = int(extent * SPLIT_FRACTION_MIN)
        cuts += 1
    return cuts


def min_root_extent(depth: int, min_extent: int = 1) -> int:
    """Smallest square side that splits to ``depth`` whatever the draws are.

    A branch fails only once both axes fall below the splittable extent, and
    each axis takes at least ``guaranteed_cuts`` cuts on the way down.
    """
    side = max(min_extent, 1)
    while 2 * guaranteed_cuts(side, min_extent) < depth:
        side += 1
    return side


def split_container(container: Rect, rng: RandomLike, min_extent: int = 1) -> Optional[Tuple[Rect, Rect]]:
    """Draw one random cut of ``container``.

    Returns the two halves, or None when the draw would leave either half
    narrower than ``min_extent`` on some side. A vertical cut stacks the halves
    along the height; a horizontal cut places them side by side along the width.
    """
    if rng.random() > 0.5:
        cut = _draw_cut(container.height, rng)
        first = Rect(container.x, container.y, container.width, cut)
        second = Rect(container.x, container.y + cut, container.width, container.height - cut)
    else:
        cut = _draw_cut(container.width, rng)
        first = Rect(container.x, container.y, cut, container.height)
        second = Rect(container.x + cut, container.y, container.width - cut, container.height)

    if min(first.width, first.height, second.width, second.height) < min_extent:
        return None
    return first, second


def split(
    depth: int,
    container: Rect,
    rng: RandomLike,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_extent: int = 1,
) -> PartitionNode:
    """Build a partition tree rooted at ``container``.

    Args:
        depth: Remaining number of cuts along every branch. 0 yields a leaf.
        container: Space owned by the returned node.
        rng: Random source used for the axis and fraction draws.
        max_attempts: How many draws to try on a node before giving up.
        min_extent: Smallest width and height any child container may have.

    Raises:
        DegenerateGeometryError: If ``container`` is empty, or if no draw in
            ``max_attempts`` produces two halves of at least ``min_extent``.
            An extent of at least ``splittable_extent(min_extent)`` along the
            chosen axis always splits on the first draw (4 cells when
            ``min_extent`` is 1).
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    if min_extent < 1:
        raise ValueError(f"min_extent must be positive, got {min_extent}")
    if container.is_degenerate():
        raise DegenerateGeometryError("Cannot partition an empty container", rect=container)

    node = PartitionNode(container)
    if depth == 0:
        return node

    for attempt in range(1, max_attempts + 1):
        halves = split_container(container, rng, min_extent)
        if halves is not None:
            break
        logger.debug("Split of %s too narrow on attempt %d; resampling", container, attempt)
    else:
        raise DegenerateGeometryError(
            "No valid split found for container", rect=container, attempts=max_attempts
        )

    first, second = halves
    logger.debug("Split %s -> %s | %s (depth=%d)", container, first, second, depth)
    node.children = (
        split(depth - 1, first, rng, max_attempts, min_extent),
        split(depth - 1, second, rng, max_attempts, min_extent),
    )
    return node


__all__ = [
    "PartitionNode",
    "split",
    "split_container",
    "splittable_extent",
    "guaranteed_cuts",
    "min_root_extent",
    "SPLIT_FRACTION_MIN",
    "SPLIT_FRACTION_MAX",
    "DEFAULT_MAX_ATTEMPTS",
]
