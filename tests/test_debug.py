from bsp_dungeon.debug import (
    CONTAINER_GLYPH,
    ROOM_GLYPH,
    draw_boundaries,
    leaf_depths,
    leaves,
    summarize,
    tree_depth,
    visit,
    walk,
)
from bsp_dungeon.geometry import Rect
from bsp_dungeon.partition import PartitionNode, split
from bsp_dungeon.rng import RandomSource
from bsp_dungeon.rooms import carve_rooms


def small_tree():
    left = PartitionNode(Rect(0, 0, 5, 6), room=Rect(1, 1, 3, 3))
    right = PartitionNode(Rect(5, 0, 5, 6), room=Rect(6, 2, 2, 2))
    return PartitionNode(Rect(0, 0, 10, 6), children=(left, right))


def test_walk_is_preorder_with_depths():
    root = small_tree()
    assert [(d, n.container) for d, n in walk(root)] == [
        (0, Rect(0, 0, 10, 6)),
        (1, Rect(0, 0, 5, 6)),
        (1, Rect(5, 0, 5, 6)),
    ]
    assert tree_depth(root) == 1
    assert leaf_depths(root) == [1, 1]
    assert [n.container.x for n in leaves(root)] == [0, 5]


def test_visit_dispatches_by_node_kind():
    seen = {"leaf": 0, "internal": 0}

    def on_leaf(_depth, _node):
        seen["leaf"] += 1

    def on_internal(_depth, _node):
        seen["internal"] += 1

    root = split(3, Rect(0, 0, 64, 64), RandomSource(4))
    visit(root, on_leaf=on_leaf, on_internal=on_internal)
    assert seen == {"leaf": 8, "internal": 7}


def test_draw_boundaries_outlines_containers_and_rooms():
    lines = draw_boundaries(small_tree(), 10, 6)
    assert len(lines) == 6 and all(len(row) == 10 for row in lines)
    assert lines[0][0] == CONTAINER_GLYPH
    assert lines[5][9] == CONTAINER_GLYPH
    assert lines[1][1] == ROOM_GLYPH
    assert lines[3][3] == ROOM_GLYPH
    assert lines[2][2] == " "


def test_draw_boundaries_over_base_rows_without_rooms():
    base = ["." * 10 for _ in range(6)]
    lines = draw_boundaries(small_tree(), 10, 6, rooms=False, base=base)
    assert lines[2][2] == "."
    assert lines[1][1] == "."
    assert lines[3][4] == CONTAINER_GLYPH
    assert ROOM_GLYPH not in "".join(lines)


def test_diagnostics_do_not_mutate_tree():
    rng = RandomSource(8)
    root = split(2, Rect(0, 0, 32, 32), rng, min_extent=4)
    carve_rooms(root, rng, 2)
    before = summarize(root)
    draw_boundaries(root, 32)
    list(walk(root))
    assert summarize(root) == before
    assert before["leaf_count"] == 4
    assert before["node_count"] == 7
    assert before["depth"] == 2
    assert all(leaf["room"] is not None for leaf in before["leaves"])
