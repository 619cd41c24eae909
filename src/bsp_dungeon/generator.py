from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from .canvas import GridCanvas, TileCanvas
from .classifier import TileClassifier
from .config import GenerationConfig
from .corridors import CorridorRouter
from .errors import ConfigurationError
from .geometry import Point, Rect
from .partition import DEFAULT_MAX_ATTEMPTS, PartitionNode, split
from .rng import RandomLike, RandomSource
from .rooms import carve_rooms, min_container_extent
from .tiles import TileRole

logger = logging.getLogger(__name__)


@dataclass
class DungeonLayout:
    """Result of one generation pass.

    ``root`` is the partition tree, kept for diagnostics such as drawing
    container boundaries. ``canvas`` is the surface that was painted.
    """

    config: GenerationConfig
    root: PartitionNode
    canvas: TileCanvas
    rooms: List[Rect] = field(default_factory=list)
    corridors: FrozenSet[Point] = frozenset()

    @property
    def bounds(self) -> Rect:
        return Rect(0, 0, self.config.dungeon_size, self.config.dungeon_size)

    def carved_cells(self) -> FrozenSet[Point]:
        """Union of room cells and corridor cells."""
        cells = set(self.corridors)
        for room in self.rooms:
            cells.update(room.cells())
        return frozenset(cells)


class DungeonGenerator:
    """
    BSP room + corridor generator painting onto a tile canvas.

    Guarantees:
    - Deterministic layout for a given seed (or an injected random source)
    - Configuration and geometry are fully resolved before the canvas is touched
    - Nothing is written outside [0, dungeon_size) on either axis
    """

    def __init__(self, canvas: Optional[TileCanvas] = None, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> None:
        self.canvas = canvas
        self.max_attempts = max_attempts

    def _resolve_canvas(self, config: GenerationConfig) -> TileCanvas:
        # TileCanvas only promises get/set/clear_all; the size check applies to
        # canvases that also expose width and height, such as GridCanvas.
        if self.canvas is None:
            return GridCanvas(config.dungeon_size)
        width = getattr(self.canvas, "width", None)
        height = getattr(self.canvas, "height", None)
        if (width is not None and width < config.dungeon_size) or (
            height is not None and height < config.dungeon_size
        ):
            raise ConfigurationError(
                "Canvas is smaller than the dungeon",
                [f"canvas is {width}x{height}, dungeon_size is {config.dungeon_size}"],
            )
        return self.canvas

    def generate(self, config: GenerationConfig, rng: Optional[RandomLike] = None) -> DungeonLayout:
        """
        Run one full generation pass.

        Without ``rng`` a fresh RandomSource is seeded from ``config.seed`` on
        every call, so regenerating with the same seed reproduces the same
        layout.
        """
        if not isinstance(config, GenerationConfig):
            raise TypeError("config must be a GenerationConfig")
        canvas = self._resolve_canvas(config)
        if rng is None:
            rng = RandomSource(config.seed)

        bounds = Rect(0, 0, config.dungeon_size, config.dungeon_size)
        logger.debug(
            "Generating BSP dungeon: seed=%s size=%d depth=%d",
            config.seed,
            config.dungeon_size,
            config.split_depth,
        )

        min_extent = min_container_extent(config.min_room_inset)
        root = split(config.split_depth, bounds, rng, self.max_attempts, min_extent)
        rooms = carve_rooms(root, rng, config.min_room_inset)

        canvas.clear_all()
        corridors = CorridorRouter(canvas, config.corridor_thickness, bounds).route(root)
        for room in rooms:
            for cell in room.cells():
                canvas.set(cell.x, cell.y, TileRole.FILLED)

        painted = TileClassifier(canvas, bounds).repaint(bounds, margin=config.min_room_inset)
        logger.info(
            "Generated dungeon %dx%d: %d rooms, %d corridor cells, %d tiles painted",
            config.dungeon_size,
            config.dungeon_size,
            len(rooms),
            len(corridors),
            painted,
        )
        return DungeonLayout(
            config=config,
            root=root,
            canvas=canvas,
            rooms=rooms,
            corridors=frozenset(corridors),
        )


def generate(
    config: GenerationConfig,
    canvas: Optional[TileCanvas] = None,
    rng: Optional[RandomLike] = None,
) -> DungeonLayout:
    """High-level API: generate one dungeon in a single call."""
    return DungeonGenerator(canvas).generate(config, rng=rng)


__all__ = ["DungeonGenerator", "DungeonLayout", "generate"]
