import pytest

from bsp_dungeon.canvas import GridCanvas
from bsp_dungeon.classifier import Neighbourhood, TileClassifier, role_for
from bsp_dungeon.geometry import Rect
from bsp_dungeon.tiles import TileRole


def hood(*filled):
    names = set(filled)
    return Neighbourhood(
        centre=True,
        left="left" in names,
        right="right" in names,
        up="up" in names,
        down="down" in names,
        up_left="up_left" in names,
        up_right="up_right" in names,
        down_left="down_left" in names,
        down_right="down_right" in names,
    )


ALL = ("left", "right", "up", "down", "up_left", "up_right", "down_left", "down_right")

CANONICAL = [
    (("right", "down", "down_right"), TileRole.TOP_LEFT),
    (("left", "right", "down", "down_left", "down_right"), TileRole.TOP_MID),
    (("left", "down", "down_left"), TileRole.TOP_RIGHT),
    (("right", "up", "down", "up_right", "down_right"), TileRole.MID_LEFT),
    (ALL, TileRole.INTERIOR),
    (("left", "up", "down", "up_left", "down_left"), TileRole.MID_RIGHT),
    (("right", "up", "up_right"), TileRole.BOTTOM_LEFT),
    (("left", "right", "up", "up_left", "up_right"), TileRole.BOTTOM_MID),
    (("left", "up", "up_left"), TileRole.BOTTOM_RIGHT),
]


@pytest.mark.parametrize("filled, role", CANONICAL)
def test_nine_canonical_neighbourhoods(filled, role):
    assert role_for(hood(*filled)) is role


@pytest.mark.parametrize(
    "filled, role",
    [
        (("right", "down"), TileRole.TOP_LEFT),
        (("left", "down"), TileRole.TOP_RIGHT),
        (("right", "up"), TileRole.BOTTOM_LEFT),
        (("left", "up"), TileRole.BOTTOM_RIGHT),
        (("left", "right", "down"), TileRole.TOP_MID),
        (("left", "right", "up"), TileRole.BOTTOM_MID),
        (("right", "up", "down"), TileRole.MID_LEFT),
        (("left", "up", "down"), TileRole.MID_RIGHT),
        (("left", "right", "up", "down"), TileRole.INTERIOR),
    ],
)
def test_diagonals_do_not_change_the_role(filled, role):
    assert role_for(hood(*filled)) is role


def test_isolated_cell_is_a_corner():
    role = role_for(hood())
    assert role is TileRole.TOP_LEFT
    assert role.is_corner
    assert not role.is_edge
    assert role_for(hood("left", "right", "down")).is_edge


def test_corners_win_over_edges():
    # a one-cell-high strip: no up and no down, the left end is a corner
    assert role_for(hood("right")) is TileRole.TOP_LEFT
    assert role_for(hood("left", "right")) is TileRole.TOP_MID


def test_empty_cell_has_no_role():
    empty = Neighbourhood(centre=False, left=True, right=True, up=True, down=True)
    assert role_for(empty) is None


@pytest.fixture
def block_canvas():
    canvas = GridCanvas(5, 5)
    canvas.fill_rect(Rect(1, 1, 3, 3), TileRole.FILLED)
    return canvas


def test_block_is_classified_by_position(block_canvas):
    classifier = TileClassifier(block_canvas, block_canvas.bounds)
    expected = {
        (1, 1): TileRole.TOP_LEFT,
        (2, 1): TileRole.TOP_MID,
        (3, 1): TileRole.TOP_RIGHT,
        (1, 2): TileRole.MID_LEFT,
        (2, 2): TileRole.INTERIOR,
        (3, 2): TileRole.MID_RIGHT,
        (1, 3): TileRole.BOTTOM_LEFT,
        (2, 3): TileRole.BOTTOM_MID,
        (3, 3): TileRole.BOTTOM_RIGHT,
    }
    for (x, y), role in expected.items():
        assert classifier.classify(x, y) is role, f"({x},{y})"
    assert classifier.classify(0, 0) is None


def test_classification_is_idempotent(block_canvas):
    classifier = TileClassifier(block_canvas, block_canvas.bounds)
    classifier.repaint()
    first = block_canvas.snapshot()
    for p in block_canvas.filled_cells():
        assert classifier.classify(p.x, p.y) is block_canvas.get(p.x, p.y)
    classifier.repaint()
    assert block_canvas.snapshot() == first


def test_repaint_never_clears_and_respects_margin():
    canvas = GridCanvas(6, 6)
    canvas.fill_rect(Rect(0, 0, 4, 4), TileRole.FILLED)
    classifier = TileClassifier(canvas, canvas.bounds)

    painted = classifier.repaint(margin=2)

    assert painted == 4
    assert canvas.count() == 16
    assert canvas.get(0, 0) is TileRole.FILLED
    assert canvas.get(1, 3) is TileRole.FILLED
    assert canvas.get(2, 2) is TileRole.INTERIOR
    assert canvas.get(3, 3) is TileRole.BOTTOM_RIGHT
    assert canvas.get(5, 5) is None


def test_cells_on_canvas_edge_treat_outside_as_empty():
    canvas = GridCanvas(3, 3)
    canvas.fill_rect(canvas.bounds, TileRole.FILLED)
    classifier = TileClassifier(canvas, canvas.bounds)
    assert classifier.classify(0, 0) is TileRole.TOP_LEFT
    assert classifier.classify(2, 2) is TileRole.BOTTOM_RIGHT
    assert classifier.classify(1, 1) is TileRole.INTERIOR
