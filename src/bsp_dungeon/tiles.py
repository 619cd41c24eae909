from enum import Enum
from typing import FrozenSet


class TileRole(Enum):
    """Symbolic tile ids written to the canvas.

    ``FILLED`` is the undifferentiated marker used while carving. The repaint
    pass replaces it with one of the nine positional roles; mapping those roles
    to actual artwork is left to whoever renders the canvas.
    """

    FILLED = "filled"
    TOP_LEFT = "top-left"
    TOP_MID = "top-mid"
    TOP_RIGHT = "top-right"
    MID_LEFT = "mid-left"
    INTERIOR = "interior"
    MID_RIGHT = "mid-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_MID = "bottom-mid"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def is_corner(self) -> bool:
        return self in CORNER_ROLES

    @property
    def is_edge(self) -> bool:
        return self in EDGE_ROLES

    @property
    def glyph(self) -> str:
        """A single-character visualization useful for logs/debug."""
        return _GLYPHS[self]


CORNER_ROLES: FrozenSet[TileRole] = frozenset(
    {TileRole.TOP_LEFT, TileRole.TOP_RIGHT, TileRole.BOTTOM_LEFT, TileRole.BOTTOM_RIGHT}
)
EDGE_ROLES: FrozenSet[TileRole] = frozenset(
    {TileRole.TOP_MID, TileRole.BOTTOM_MID, TileRole.MID_LEFT, TileRole.MID_RIGHT}
)

_GLYPHS = {
    TileRole.FILLED: "#",
    TileRole.TOP_LEFT: "+",
    TileRole.TOP_RIGHT: "+",
    TileRole.BOTTOM_LEFT: "+",
    TileRole.BOTTOM_RIGHT: "+",
    TileRole.TOP_MID: "-",
    TileRole.BOTTOM_MID: "-",
    TileRole.MID_LEFT: "|",
    TileRole.MID_RIGHT: "|",
    TileRole.INTERIOR: ".",
}
