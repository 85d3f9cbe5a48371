import gc

from bsp_dungeon.generators.bsp import (
    NodeKind,
    PartitionTree,
    Rectangle,
    TreeNode,
    extract_leaves,
)
from tests.helpers import StackedTree


def test_single_node_is_its_own_leaf() -> None:
    node = TreeNode(NodeKind.PARTITION, Rectangle.from_size(10, 10))
    assert extract_leaves(node) == [node]


def test_extract_leaves_is_breadth_first(stacked_tree: StackedTree) -> None:
    leaves = extract_leaves(stacked_tree.root)
    # upper is a leaf one level above the two lower leaves
    assert leaves == [stacked_tree.upper, stacked_tree.left, stacked_tree.right]


def test_extract_leaves_of_subtree(stacked_tree: StackedTree) -> None:
    assert extract_leaves(stacked_tree.lower) == [stacked_tree.left, stacked_tree.right]


def test_furnished_leaf_stays_a_leaf(stacked_tree: StackedTree) -> None:
    assert stacked_tree.left.room is not None
    assert stacked_tree.left.is_leaf
    assert stacked_tree.left.room.parent is stacked_tree.left


def test_footprint_prefers_room(stacked_tree: StackedTree) -> None:
    assert stacked_tree.left.footprint == Rectangle.from_bounds(1, 1, 3, 9)
    assert stacked_tree.lower.footprint == stacked_tree.lower.bounds


def test_parent_link_does_not_keep_parent_alive() -> None:
    parent = TreeNode(NodeKind.PARTITION, Rectangle.from_size(10, 10))
    child = TreeNode(NodeKind.PARTITION, Rectangle.from_size(5, 10), parent=parent, depth=1)
    assert child.parent is parent
    del parent
    gc.collect()
    assert child.parent is None


def test_partition_tree_helpers(stacked_tree: StackedTree) -> None:
    tree = PartitionTree(stacked_tree.root, stacked_tree.nodes)
    assert len(tree) == 5
    assert tree.leaves() == extract_leaves(stacked_tree.root)
    assert tree.internal_nodes() == [stacked_tree.root, stacked_tree.lower]
    assert tree.max_depth == 2
