"""
Tree nodes for the BSP dungeon generator.

A single node class is shared by partitions, rooms and corridors. The
``kind`` tag decides which payload fields are meaningful:

- PARTITION: ``split_line`` once split, ``room`` once a leaf is furnished
- ROOM: nothing extra, ``parent`` points at the leaf it was inscribed in
- CORRIDOR: ``structures`` plus the two rectangles actually bridged

Children are owned by their node. Parent links are weak references so a
node never keeps its ancestors alive.
"""

import weakref
from collections import deque
from enum import Enum, auto
from typing import Deque, List, Optional, Tuple

from .geometry import Rectangle, SplitLine


class NodeKind(Enum):
    """Variant tag for tree nodes"""
    PARTITION = auto()
    ROOM = auto()
    CORRIDOR = auto()


class TreeNode:
    """Node in the dungeon structure tree"""

    def __init__(self, kind: NodeKind, bounds: Rectangle,
                 parent: Optional['TreeNode'] = None, depth: int = 0):
        self.kind = kind
        self.bounds = bounds
        self.depth = depth
        self.children: List[TreeNode] = []
        self._parent_ref = weakref.ref(parent) if parent is not None else None

        # Partition payload
        self.split_line: Optional[SplitLine] = None
        self.room: Optional[TreeNode] = None

        # Corridor payload
        self.structures: Optional[Tuple[TreeNode, TreeNode]] = None
        self.anchor_bounds: Optional[Rectangle] = None
        self.target_bounds: Optional[Rectangle] = None
        self.is_vertical = False

    def __repr__(self) -> str:
        return (f"TreeNode({self.kind.name}, {self.bounds.bottom_left.as_tuple()}->"
                f"{self.bounds.top_right.as_tuple()}, depth={self.depth})")

    @property
    def parent(self) -> Optional['TreeNode']:
        """Parent node, or None for roots and nodes whose parent is gone"""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def length(self) -> int:
        return self.bounds.length

    @property
    def footprint(self) -> Rectangle:
        """Rectangle that stands for this node when connecting structures.

        A furnished leaf is represented by its room; anything else by its
        own bounds.
        """
        if self.kind == NodeKind.PARTITION and self.room is not None:
            return self.room.bounds
        return self.bounds

    def add_child(self, child: 'TreeNode') -> None:
        self.children.append(child)


def extract_leaves(node: TreeNode) -> List[TreeNode]:
    """
    Collect every leaf reachable from node, breadth-first.

    A node without children is returned on its own. Internal nodes are
    walked but never collected.

    Args:
        node: Root of the tree or of any subtree

    Returns:
        Leaf nodes in breadth-first order
    """
    if node.is_leaf:
        return [node]

    leaves: List[TreeNode] = []
    to_check: Deque[TreeNode] = deque(node.children)
    while to_check:
        current = to_check.popleft()
        if current.is_leaf:
            leaves.append(current)
        else:
            to_check.extend(current.children)
    return leaves


class PartitionTree:
    """Result of space partitioning: the root plus every node in creation order"""

    def __init__(self, root: TreeNode, nodes: List[TreeNode]):
        self.root = root
        self.nodes = nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def leaves(self) -> List[TreeNode]:
        return extract_leaves(self.root)

    def internal_nodes(self) -> List[TreeNode]:
        """Nodes that were split, in creation order"""
        return [node for node in self.nodes if len(node.children) == 2]

    @property
    def max_depth(self) -> int:
        return max(node.depth for node in self.nodes)
