from __future__ import annotations

import random
from dataclasses import dataclass

from bsp_dungeon.generators.bsp import (
    CorridorGenerator,
    DungeonLayout,
    DungeonSettings,
    NodeKind,
    PartitionTree,
    Rectangle,
    TreeNode,
)


class FirstChoiceRandom(random.Random):
    """Random generator whose random picks always take the first option."""

    def randrange(self, *args, **kwargs) -> int:  # type: ignore[override]
        return 0


class LowestRandom(random.Random):
    """Random generator whose integer draws always return the lower bound."""

    def randint(self, a: int, b: int) -> int:  # type: ignore[override]
        return a


@dataclass
class StackedTree:
    """Two leaves side by side below one wide leaf.

    root (0,0)-(20,20)
      lower (0,0)-(20,10)
        left leaf (0,0)-(10,10), room (1,1)-(3,9)
        right leaf (10,0)-(20,10), room given by the caller
      upper leaf (0,10)-(20,20), room (2,12)-(18,18)
    """

    root: TreeNode
    lower: TreeNode
    upper: TreeNode
    left: TreeNode
    right: TreeNode

    @property
    def nodes(self) -> list[TreeNode]:
        return [self.root, self.lower, self.upper, self.left, self.right]


def furnish(leaf: TreeNode, x1: int, y1: int, x2: int, y2: int) -> TreeNode:
    room = TreeNode(NodeKind.ROOM, Rectangle.from_bounds(x1, y1, x2, y2), parent=leaf, depth=leaf.depth)
    leaf.room = room
    return room


def build_stacked_tree(right_room: tuple[int, int, int, int]) -> StackedTree:
    root = TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(0, 0, 20, 20))
    lower = TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(0, 0, 20, 10), parent=root, depth=1)
    upper = TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(0, 10, 20, 20), parent=root, depth=1)
    root.add_child(lower)
    root.add_child(upper)
    left = TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(0, 0, 10, 10), parent=lower, depth=2)
    right = TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(10, 0, 20, 10), parent=lower, depth=2)
    lower.add_child(left)
    lower.add_child(right)

    furnish(left, 1, 1, 3, 9)
    furnish(right, *right_room)
    furnish(upper, 2, 12, 18, 18)
    return StackedTree(root, lower, upper, left, right)


def build_stacked_layout(right_room: tuple[int, int, int, int] = (11, 1, 19, 8),
                         corridor_width: int = 2) -> tuple[DungeonLayout, StackedTree]:
    """Layout over a stacked tree, with corridors from a first-choice generator.

    The minimum partition size is larger than any leaf, so no leaf counts as
    oversized.
    """
    stacked = build_stacked_tree(right_room)
    tree = PartitionTree(stacked.root, stacked.nodes)
    rooms = [leaf.room for leaf in tree.leaves()]
    corridors = CorridorGenerator(FirstChoiceRandom(), corridor_width=2).create_corridors(tree.nodes)
    settings = DungeonSettings(dungeon_width=20, dungeon_length=20, room_width_min=11,
                               room_length_min=11, corridor_width=corridor_width)
    return DungeonLayout(settings, tree, rooms, corridors), stacked
