"""
Read-only diagnostics over a partition tree.

Nothing here mutates the tree or any canvas; these helpers exist to inspect
and visualize a generated layout (container outlines, room outlines, stats).
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .geometry import Rect
from .partition import PartitionNode

CONTAINER_GLYPH = ":"
ROOM_GLYPH = "o"


def walk(root: PartitionNode, depth: int = 0) -> Iterator[Tuple[int, PartitionNode]]:
    """Pre-order traversal yielding ``(depth, node)``; the root has depth 0."""
    yield depth, root
    if root.children is not None:
        for child in root.children:
            yield from walk(child, depth + 1)


def visit(
    root: PartitionNode,
    on_leaf: Optional[Callable[[int, PartitionNode], None]] = None,
    on_internal: Optional[Callable[[int, PartitionNode], None]] = None,
) -> None:
    """Call ``on_leaf``/``on_internal`` for every node in pre-order."""
    for depth, node in walk(root):
        if node.is_leaf():
            if on_leaf is not None:
                on_leaf(depth, node)
        elif on_internal is not None:
            on_internal(depth, node)


def leaves(root: PartitionNode) -> List[PartitionNode]:
    return list(root.leaves())


def tree_depth(root: PartitionNode) -> int:
    """Length of the longest root-to-leaf path, in edges."""
    return max(depth for depth, _ in walk(root))


def leaf_depths(root: PartitionNode) -> List[int]:
    return [depth for depth, node in walk(root) if node.is_leaf()]


def _outline(rect: Rect) -> Iterator[Tuple[int, int]]:
    for x in range(rect.x, rect.x_max):
        yield x, rect.y
        yield x, rect.y_max - 1
    for y in range(rect.y, rect.y_max):
        yield rect.x, y
        yield rect.x_max - 1, y


def draw_boundaries(
    root: PartitionNode,
    width: int,
    height: Optional[int] = None,
    rooms: bool = True,
    base: Optional[List[str]] = None,
) -> List[str]:
    """Render container outlines (and optionally room outlines) as ASCII rows.

    Args:
        root: Tree to draw.
        width: Width of the output in cells.
        height: Height of the output; defaults to ``width``.
        rooms: Also draw each leaf's room outline (drawn over containers).
        base: Optional rows to draw over, e.g. ``GridCanvas.to_lines()``.

    Returns:
        One string per row.
    """
    height = width if height is None else height
    if base is not None:
        grid = [list(row.ljust(width)[:width]) for row in base[:height]]
        grid.extend([" "] * width for _ in range(height - len(grid)))
    else:
        grid = [[" "] * width for _ in range(height)]

    def plot(rect: Rect, glyph: str) -> None:
        for x, y in _outline(rect):
            if 0 <= x < width and 0 <= y < height:
                grid[y][x] = glyph

    for _depth, node in walk(root):
        plot(node.container, CONTAINER_GLYPH)
    if rooms:
        for leaf in root.leaves():
            if leaf.room is not None:
                plot(leaf.room, ROOM_GLYPH)
    return ["".join(row) for row in grid]


def summarize(root: PartitionNode) -> Dict[str, Any]:
    """JSON-serializable summary of a tree: counts, depth and leaf rectangles."""
    leaf_nodes = leaves(root)
    return {
        "depth": tree_depth(root),
        "node_count": sum(1 for _ in walk(root)),
        "leaf_count": len(leaf_nodes),
        "container": asdict(root.container),
        "leaves": [
            {
                "container": asdict(leaf.container),
                "room": None if leaf.room is None else asdict(leaf.room),
            }
            for leaf in leaf_nodes
        ],
    }


__all__ = [
    "walk",
    "visit",
    "leaves",
    "tree_depth",
    "leaf_depths",
    "draw_boundaries",
    "summarize",
]
