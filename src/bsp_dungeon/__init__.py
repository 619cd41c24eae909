"""
BSP dungeon generator.

Splits a square grid into a binary partition tree, carves a room in every
leaf, joins sibling containers with corridors and autotiles the carved cells
onto a tile canvas. Rendering and engine integration stay outside this
package; callers supply or read back a canvas.
"""

from .canvas import GridCanvas, TileCanvas
from .classifier import TileClassifier
from .config import GenerationConfig, load_config
from .corridors import CorridorRouter, route_corridors
from .errors import ConfigurationError, DegenerateGeometryError, DungeonError
from .generator import DungeonGenerator, DungeonLayout, generate
from .geometry import Point, Rect, Vec2
from .partition import PartitionNode, split
from .rng import RandomSource
from .rooms import carve_rooms
from .tiles import TileRole

__all__ = [
    "ConfigurationError",
    "CorridorRouter",
    "DegenerateGeometryError",
    "DungeonError",
    "DungeonGenerator",
    "DungeonLayout",
    "GenerationConfig",
    "GridCanvas",
    "PartitionNode",
    "Point",
    "RandomSource",
    "Rect",
    "TileCanvas",
    "TileClassifier",
    "TileRole",
    "Vec2",
    "carve_rooms",
    "generate",
    "load_config",
    "route_corridors",
    "split",
]
