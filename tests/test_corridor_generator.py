import random

import pytest

from bsp_dungeon.generators.bsp import (
    CorridorGenerator,
    NodeKind,
    Rectangle,
    RelativePosition,
    TreeNode,
    relative_position,
    valid_coordinate_for_overlap,
)
from bsp_dungeon.generators.bsp.corridor_generator import CANDIDATE_EDGE_TOLERANCE, VERTICAL
from tests.helpers import StackedTree, build_stacked_tree, furnish


def _furnished_leaf(bounds: tuple, room: tuple, depth: int = 1) -> TreeNode:
    leaf = TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(*bounds), depth=depth)
    furnish(leaf, *room)
    return leaf


# ---------------------------------------------------------------------------
# Overlap rule
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    ("anchor", "target", "expected"),
    [
        ((10, 20), (0, 30), 14),   # target contains anchor
        ((0, 30), (10, 20), 14),   # anchor contains target
        ((5, 20), (0, 12), 7),     # anchor low end inside target
        ((0, 12), (5, 20), 7),     # anchor high end inside target
        ((0, 4), (0, 4), 1),       # overlap exactly width plus both clearances
        ((0, 3), (0, 3), None),    # one unit too narrow
        ((0, 5), (6, 10), None),   # disjoint
        ((0, 5), (5, 10), None),   # touching only
    ],
)
def test_valid_coordinate_for_overlap(anchor, target, expected) -> None:
    assert valid_coordinate_for_overlap(*anchor, *target, corridor_width=2, clearance=1) == expected


def test_overlap_coordinate_stays_inside_overlap() -> None:
    for anchor_low in range(0, 10):
        for target_low in range(0, 10):
            anchor_high, target_high = anchor_low + 8, target_low + 6
            coordinate = valid_coordinate_for_overlap(anchor_low, anchor_high, target_low,
                                                      target_high, 2, 1)
            if coordinate is None:
                continue
            assert max(anchor_low, target_low) + 1 <= coordinate
            assert coordinate + 2 + 1 <= min(anchor_high, target_high)


def test_zero_clearance_allows_flush_corridor() -> None:
    assert valid_coordinate_for_overlap(0, 2, 0, 2, corridor_width=2, clearance=0) == 0


# ---------------------------------------------------------------------------
# Direct connections
# ---------------------------------------------------------------------------

def test_relative_position_uses_partition_bounds() -> None:
    lower = _furnished_leaf((0, 0, 10, 10), (1, 1, 9, 8))
    upper = _furnished_leaf((0, 10, 10, 20), (2, 12, 8, 18))
    assert relative_position(lower, upper) is RelativePosition.UP
    assert relative_position(upper, lower) is RelativePosition.DOWN


def test_vertical_connection_is_symmetric() -> None:
    lower = _furnished_leaf((0, 0, 10, 10), (1, 1, 9, 8))
    upper = _furnished_leaf((0, 10, 10, 20), (2, 12, 8, 18))
    generator = CorridorGenerator(random.Random(0), corridor_width=2)

    corridor = generator.connect(lower, upper)
    assert corridor.bounds == Rectangle.from_bounds(4, 8, 6, 12)
    assert corridor.is_vertical
    assert corridor.structures == (lower, upper)

    swapped = generator.connect(upper, lower)
    assert swapped.bounds == corridor.bounds
    assert swapped.structures == (lower, upper)


def test_horizontal_connection_is_symmetric() -> None:
    left = _furnished_leaf((0, 0, 10, 10), (1, 1, 8, 9))
    right = _furnished_leaf((10, 0, 20, 10), (12, 2, 18, 9))
    generator = CorridorGenerator(random.Random(0), corridor_width=2)

    corridor = generator.connect(left, right)
    assert corridor.bounds == Rectangle.from_bounds(8, 4, 12, 6)
    assert not corridor.is_vertical
    assert corridor.anchor_bounds == left.room.bounds
    assert corridor.target_bounds == right.room.bounds
    assert generator.connect(right, left).bounds == corridor.bounds


def test_corridor_width_matches_setting() -> None:
    lower = _furnished_leaf((0, 0, 20, 10), (1, 1, 19, 8))
    upper = _furnished_leaf((0, 10, 20, 20), (1, 12, 19, 18))
    corridor = CorridorGenerator(random.Random(0), corridor_width=3).connect(lower, upper)
    assert corridor.width == 3
    assert corridor.bounds.y1 == 8
    assert corridor.bounds.y2 == 12


def test_no_overlap_gives_no_corridor() -> None:
    lower = _furnished_leaf((0, 0, 20, 10), (1, 1, 5, 8))
    upper = _furnished_leaf((0, 10, 20, 20), (12, 12, 19, 18))
    assert CorridorGenerator(random.Random(0), corridor_width=2).connect(lower, upper) is None


# ---------------------------------------------------------------------------
# Candidate selection and retry
# ---------------------------------------------------------------------------

def test_anchor_candidates_within_tolerance(first_choice_rng: random.Random) -> None:
    best = _furnished_leaf((0, 0, 10, 40), (1, 1, 9, 30))
    close = _furnished_leaf((10, 0, 20, 40), (11, 1, 19, 25))
    far = _furnished_leaf((20, 0, 30, 40), (21, 1, 29, 30 - CANDIDATE_EDGE_TOLERANCE))
    generator = CorridorGenerator(first_choice_rng, corridor_width=2)

    candidates = generator.anchor_candidates([far, close, best], VERTICAL)
    assert candidates == [best, close]


def test_single_anchor_leaf_is_the_only_candidate() -> None:
    leaf = _furnished_leaf((0, 0, 10, 10), (1, 1, 9, 9))
    generator = CorridorGenerator(random.Random(0), corridor_width=2)
    assert generator.anchor_candidates([leaf], VERTICAL) == [leaf]


def test_pick_target_prefers_nearest_reachable_room() -> None:
    anchor_rect = Rectangle.from_bounds(0, 0, 10, 10)
    target = TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(0, 10, 30, 40))
    near_but_offset = _furnished_leaf((10, 10, 30, 20), (15, 11, 29, 19))
    reachable_far = _furnished_leaf((0, 20, 10, 40), (1, 25, 9, 39))
    reachable_near = _furnished_leaf((0, 10, 10, 20), (2, 14, 9, 19))
    generator = CorridorGenerator(random.Random(0), corridor_width=2)

    picked = generator.pick_target(anchor_rect, [near_but_offset, reachable_far, reachable_near],
                                   target, VERTICAL)
    assert picked == reachable_near.room.bounds


def test_pick_target_falls_back_to_structure() -> None:
    anchor_rect = Rectangle.from_bounds(0, 0, 10, 10)
    target = TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(0, 10, 30, 40))
    unreachable = _furnished_leaf((10, 10, 30, 20), (15, 11, 29, 19))
    generator = CorridorGenerator(random.Random(0), corridor_width=2)
    assert generator.pick_target(anchor_rect, [unreachable], target, VERTICAL) == target.bounds


def test_retry_uses_next_candidate(stacked_tree: StackedTree, first_choice_rng: random.Random) -> None:
    generator = CorridorGenerator(first_choice_rng, corridor_width=2)
    corridor = generator.connect(stacked_tree.lower, stacked_tree.upper, depth=0)

    assert corridor is not None
    assert corridor.kind == NodeKind.CORRIDOR
    assert corridor.bounds == Rectangle.from_bounds(13, 8, 15, 12)
    assert corridor.anchor_bounds == stacked_tree.right.room.bounds
    assert corridor.target_bounds == stacked_tree.upper.room.bounds
    assert corridor.structures == (stacked_tree.lower, stacked_tree.upper)
    assert corridor.is_vertical


def test_exhausted_candidates_give_no_corridor(first_choice_rng: random.Random) -> None:
    tree = build_stacked_tree((11, 1, 13, 8))
    generator = CorridorGenerator(first_choice_rng, corridor_width=2)
    assert generator.connect(tree.lower, tree.upper) is None


# ---------------------------------------------------------------------------
# Whole tree
# ---------------------------------------------------------------------------

def test_create_corridors_deepest_first(stacked_tree: StackedTree,
                                       first_choice_rng: random.Random) -> None:
    generator = CorridorGenerator(first_choice_rng, corridor_width=2)
    corridors = generator.create_corridors(stacked_tree.nodes)

    assert [c.bounds for c in corridors] == [
        Rectangle.from_bounds(3, 3, 11, 5),
        Rectangle.from_bounds(13, 8, 15, 12),
    ]
    assert [c.depth for c in corridors] == [1, 0]
    assert generator.skipped == 0


def test_create_corridors_skips_unconnectable_pairs(first_choice_rng: random.Random) -> None:
    tree = build_stacked_tree((11, 1, 13, 8))
    generator = CorridorGenerator(first_choice_rng, corridor_width=2)
    corridors = generator.create_corridors(tree.nodes)

    assert len(corridors) == 1
    assert corridors[0].structures == (tree.left, tree.right)
    assert generator.skipped == 1
