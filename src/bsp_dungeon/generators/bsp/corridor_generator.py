"""
Corridor synthesis between sibling structures of the partition tree.

Every split node gets one straight corridor joining its two children. A
child may be a single furnished leaf or a whole subtree, so the generator
looks inside each structure for a pair of rooms that face each other:

1. The angle between the two partition centers decides whether the corridor
   runs vertically (up/down) or horizontally (left/right).
2. On the anchor side (lower or left) the rooms closest to the other
   structure are candidates; one of them is picked at random.
3. On the target side (upper or right) the nearest room whose span overlaps
   the anchor room wide enough for a corridor is used. When none does, the
   whole target structure stands in.
4. If the pair has no usable overlap the next anchor candidate is tried.
   Running out of candidates drops the corridor.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .geometry import (
    Rectangle,
    RelativePosition,
    angle_between,
    classify_angle,
    middle_point,
)
from .tree import NodeKind, TreeNode, extract_leaves

logger = logging.getLogger(__name__)


# Anchor rooms whose far edge is within this distance of the best one are
# considered equally good candidates.
CANDIDATE_EDGE_TOLERANCE = 10

# Distance kept between a corridor edge and the end of the overlap it sits in
DEFAULT_WALL_CLEARANCE = 1


def valid_coordinate_for_overlap(anchor_low: int, anchor_high: int,
                                 target_low: int, target_high: int,
                                 corridor_width: int, clearance: int) -> Optional[int]:
    """
    Position of a corridor running through the overlap of two intervals.

    The overlap is shrunk by ``clearance`` on both ends and by
    ``corridor_width`` on the high end, and the midpoint of what remains is
    returned. Depending on how the intervals relate the overlap is:

    - target contains anchor: the anchor interval
    - anchor contains target: the target interval
    - anchor's low end inside target: anchor_low .. target_high
    - anchor's high end inside target: target_low .. anchor_high

    Args:
        anchor_low, anchor_high: Span of the anchor rectangle on the free axis
        target_low, target_high: Span of the target rectangle on the free axis
        corridor_width: Corridor thickness
        clearance: Gap kept to the walls on either side

    Returns:
        Low edge of the corridor, or None when the overlap is too narrow
    """
    low = max(anchor_low, target_low)
    high = min(anchor_high, target_high)
    if low > high:
        return None

    start = low + clearance
    end = high - clearance - corridor_width
    if start > end:
        return None
    return middle_point(start, end)


def relative_position(structure_one: TreeNode, structure_two: TreeNode) -> RelativePosition:
    """Where structure_two lies as seen from structure_one"""
    return classify_angle(angle_between(structure_one.bounds, structure_two.bounds))


@dataclass(frozen=True)
class _CorridorAxis:
    """Edge and span accessors for one corridor direction.

    Vertical corridors leave the anchor through its top edge and enter the
    target through its bottom edge; their free coordinate is X. Horizontal
    corridors use the right and left edges and a free Y coordinate.
    """
    is_vertical: bool

    def far_edge(self, rect: Rectangle) -> int:
        return rect.y2 if self.is_vertical else rect.x2

    def near_edge(self, rect: Rectangle) -> int:
        return rect.y1 if self.is_vertical else rect.x1

    def span(self, rect: Rectangle) -> Tuple[int, int]:
        return (rect.x1, rect.x2) if self.is_vertical else (rect.y1, rect.y2)

    def build(self, anchor: Rectangle, target: Rectangle,
              coordinate: int, corridor_width: int) -> Optional[Rectangle]:
        start = self.far_edge(anchor)
        end = self.near_edge(target)
        if end < start:
            return None
        if self.is_vertical:
            return Rectangle.from_bounds(coordinate, start, coordinate + corridor_width, end)
        return Rectangle.from_bounds(start, coordinate, end, coordinate + corridor_width)


VERTICAL = _CorridorAxis(is_vertical=True)
HORIZONTAL = _CorridorAxis(is_vertical=False)


class CorridorGenerator:
    """Connects the two children of every split node with a corridor"""

    def __init__(self, rng: random.Random, corridor_width: int,
                 clearance: int = DEFAULT_WALL_CLEARANCE):
        self.rng = rng
        self.corridor_width = corridor_width
        self.clearance = clearance
        self.skipped = 0

    def create_corridors(self, all_nodes: List[TreeNode]) -> List[TreeNode]:
        """
        Build corridors for all split nodes, deepest first.

        Args:
            all_nodes: Flat node list from the partitioner

        Returns:
            Corridor nodes; nodes whose children could not be joined are skipped
        """
        corridors = []
        self.skipped = 0
        for node in sorted(all_nodes, key=lambda n: n.depth, reverse=True):
            if len(node.children) != 2:
                continue
            corridor = self.connect(node.children[0], node.children[1], depth=node.depth)
            if corridor is None:
                self.skipped += 1
                logger.debug(f"No corridor between children of {node!r}")
                continue
            corridors.append(corridor)

        if self.skipped:
            logger.info(f"Skipped {self.skipped} corridor(s) without a valid overlap")
        return corridors

    def connect(self, structure_one: TreeNode, structure_two: TreeNode,
                depth: int = 0) -> Optional[TreeNode]:
        """
        Join two structures with a single straight corridor.

        Returns:
            The corridor node, or None if no candidate pair overlaps enough
        """
        position = relative_position(structure_one, structure_two)
        if position == RelativePosition.UP:
            return self._connect(structure_one, structure_two, VERTICAL, depth)
        if position == RelativePosition.DOWN:
            return self._connect(structure_two, structure_one, VERTICAL, depth)
        if position == RelativePosition.LEFT:
            return self._connect(structure_two, structure_one, HORIZONTAL, depth)
        return self._connect(structure_one, structure_two, HORIZONTAL, depth)

    def _connect(self, anchor_structure: TreeNode, target_structure: TreeNode,
                 axis: _CorridorAxis, depth: int) -> Optional[TreeNode]:
        target_leaves = extract_leaves(target_structure)
        candidates = self.anchor_candidates(extract_leaves(anchor_structure), axis)

        for attempt, anchor in enumerate(candidates):
            anchor_rect = anchor.footprint
            target_rect = self.pick_target(anchor_rect, target_leaves, target_structure, axis)
            coordinate = self._coordinate(anchor_rect, target_rect, axis)
            if coordinate is None:
                logger.debug(f"Candidate {attempt} has no overlap with its target, trying the next one")
                continue

            bounds = axis.build(anchor_rect, target_rect, coordinate, self.corridor_width)
            if bounds is None:
                logger.debug(f"Candidate {attempt} lies beyond its target, trying the next one")
                continue

            corridor = TreeNode(NodeKind.CORRIDOR, bounds, depth=depth)
            corridor.structures = (anchor_structure, target_structure)
            corridor.anchor_bounds = anchor_rect
            corridor.target_bounds = target_rect
            corridor.is_vertical = axis.is_vertical
            return corridor

        return None

    def anchor_candidates(self, leaves: List[TreeNode], axis: _CorridorAxis) -> List[TreeNode]:
        """
        Order the anchor-side leaves in which they should be tried.

        Leaves whose far edge is within CANDIDATE_EDGE_TOLERANCE of the
        furthest one qualify. A random one of them goes first, the rest
        follow by descending far edge.
        """
        ordered = sorted(leaves, key=lambda leaf: axis.far_edge(leaf.footprint), reverse=True)
        if len(ordered) == 1:
            return ordered

        best_edge = axis.far_edge(ordered[0].footprint)
        filtered = [leaf for leaf in ordered
                    if abs(best_edge - axis.far_edge(leaf.footprint)) < CANDIDATE_EDGE_TOLERANCE]
        chosen = filtered[self.rng.randrange(len(filtered))]
        return [chosen] + [leaf for leaf in filtered if leaf is not chosen]

    def pick_target(self, anchor_rect: Rectangle, target_leaves: List[TreeNode],
                    target_structure: TreeNode, axis: _CorridorAxis) -> Rectangle:
        """Nearest target room reachable from anchor_rect, else the whole structure"""
        reachable = [leaf.footprint for leaf in target_leaves
                     if self._coordinate(anchor_rect, leaf.footprint, axis) is not None]
        if not reachable:
            return target_structure.footprint
        return min(reachable, key=axis.near_edge)

    def _coordinate(self, anchor_rect: Rectangle, target_rect: Rectangle,
                    axis: _CorridorAxis) -> Optional[int]:
        anchor_low, anchor_high = axis.span(anchor_rect)
        target_low, target_high = axis.span(target_rect)
        return valid_coordinate_for_overlap(anchor_low, anchor_high, target_low, target_high,
                                            self.corridor_width, self.clearance)
