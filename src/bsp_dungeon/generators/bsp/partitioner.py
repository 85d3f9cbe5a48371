"""
Binary space partitioning of the dungeon area.

The root rectangle is split through a FIFO work queue. Every dequeue counts
towards the iteration budget, whether or not the node ends up split, so the
amount of work is bounded by ``max_iterations`` regardless of room sizes.
"""

import logging
import random
from collections import deque
from typing import Deque, List

from .geometry import Orientation, Point, Rectangle, SplitLine
from .tree import NodeKind, PartitionTree, TreeNode

logger = logging.getLogger(__name__)


class BinarySpacePartitioner:
    """Builds the partition tree for a dungeon of the given size"""

    def __init__(self, dungeon_width: int, dungeon_length: int, rng: random.Random):
        self.rng = rng
        self.root_node = TreeNode(
            NodeKind.PARTITION,
            Rectangle.from_size(dungeon_width, dungeon_length),
        )

    def build(self, max_iterations: int, room_width_min: int, room_length_min: int) -> PartitionTree:
        """
        Split the root until the queue drains or the budget runs out.

        Args:
            max_iterations: Hard cap on the number of dequeued nodes
            room_width_min: Smallest width a split child may have
            room_length_min: Smallest length a split child may have

        Returns:
            PartitionTree with every node created, root first
        """
        queue: Deque[TreeNode] = deque([self.root_node])
        nodes: List[TreeNode] = [self.root_node]
        iterations = 0

        while iterations < max_iterations and queue:
            iterations += 1
            current = queue.popleft()
            if current.width >= room_width_min * 2 or current.length >= room_length_min * 2:
                self.split_the_space(current, nodes, queue, room_width_min, room_length_min)

        logger.debug(f"Partitioned {self.root_node.width}x{self.root_node.length} into "
                     f"{len(nodes)} nodes after {iterations} iterations")
        return PartitionTree(self.root_node, nodes)

    def split_the_space(self, node: TreeNode, nodes: List[TreeNode], queue: Deque[TreeNode],
                        room_width_min: int, room_length_min: int) -> None:
        """Divide node in two and register both children"""
        line = self.get_line_dividing_space(node.bounds, room_width_min, room_length_min)
        bounds = node.bounds

        if line.orientation == Orientation.HORIZONTAL:
            first = Rectangle(bounds.bottom_left, Point(bounds.x2, line.coordinate))
            second = Rectangle(Point(bounds.x1, line.coordinate), bounds.top_right)
        else:
            first = Rectangle(bounds.bottom_left, Point(line.coordinate, bounds.y2))
            second = Rectangle(Point(line.coordinate, bounds.y1), bounds.top_right)

        node.split_line = line
        for child_bounds in (first, second):
            child = TreeNode(NodeKind.PARTITION, child_bounds, parent=node, depth=node.depth + 1)
            node.add_child(child)
            nodes.append(child)
            queue.append(child)

        logger.debug(f"Split node at depth {node.depth} {line.orientation.name.lower()} "
                     f"at {line.coordinate}")

    def get_line_dividing_space(self, bounds: Rectangle, room_width_min: int,
                                room_length_min: int) -> SplitLine:
        """
        Pick the orientation and position of the dividing line.

        Both orientations are equally likely when both axes can be split;
        otherwise the splittable axis decides.
        """
        length_status = bounds.length >= room_length_min * 2
        width_status = bounds.width >= room_width_min * 2

        if length_status and width_status:
            orientation = self.rng.choice((Orientation.HORIZONTAL, Orientation.VERTICAL))
        elif width_status:
            orientation = Orientation.VERTICAL
        else:
            orientation = Orientation.HORIZONTAL

        if orientation == Orientation.HORIZONTAL:
            coordinate = self.rng.randint(bounds.y1 + room_length_min, bounds.y2 - room_length_min)
        else:
            coordinate = self.rng.randint(bounds.x1 + room_width_min, bounds.x2 - room_width_min)
        return SplitLine(orientation, coordinate)
