"""
Room inscription inside leaf partitions.

Each leaf receives one room. The room's bottom-left corner is drawn from the
lower fraction of the leaf (``bottom_corner_modifier``) and its top-right
corner from the upper fraction (``top_corner_modifier``), after insetting the
leaf by ``room_offset`` on every side.
"""

import logging
import random
from typing import List

from .geometry import Point, Rectangle
from .tree import NodeKind, TreeNode

logger = logging.getLogger(__name__)


class RoomGenerator:
    """Furnishes leaf partitions with rooms"""

    def __init__(self, rng: random.Random):
        self.rng = rng

    def generate_rooms_in_spaces(self, room_spaces: List[TreeNode], bottom_corner_modifier: float,
                                 top_corner_modifier: float, room_offset: int) -> List[TreeNode]:
        """
        Create one room per leaf partition.

        Args:
            room_spaces: Leaf partitions, usually from extract_leaves()
            bottom_corner_modifier: Fraction (0-0.3) of the leaf the bottom-left corner may use
            top_corner_modifier: Fraction (0.7-1) of the leaf where the top-right corner starts
            room_offset: Inset applied to the leaf before interpolating

        Returns:
            Room nodes in the same order as room_spaces
        """
        rooms = []
        for space in room_spaces:
            bounds = space.bounds
            bottom_left = self.generate_bottom_left_corner_between(
                bounds.bottom_left, bounds.top_right, bottom_corner_modifier, room_offset)
            top_right = self.generate_top_right_corner_between(
                bounds.bottom_left, bounds.top_right, top_corner_modifier, room_offset)

            room = TreeNode(NodeKind.ROOM, Rectangle(bottom_left, top_right),
                            parent=space, depth=space.depth)
            space.room = room
            rooms.append(room)

        logger.debug(f"Inscribed {len(rooms)} rooms")
        return rooms

    def generate_bottom_left_corner_between(self, boundary_left: Point, boundary_right: Point,
                                            point_modifier: float, offset: int) -> Point:
        min_x, max_x, min_y, max_y = _inset(boundary_left, boundary_right, offset)
        return Point(
            self._random_between(min_x, int(min_x + (max_x - min_x) * point_modifier)),
            self._random_between(min_y, int(min_y + (max_y - min_y) * point_modifier)),
        )

    def generate_top_right_corner_between(self, boundary_left: Point, boundary_right: Point,
                                          point_modifier: float, offset: int) -> Point:
        min_x, max_x, min_y, max_y = _inset(boundary_left, boundary_right, offset)
        return Point(
            self._random_between(int(min_x + (max_x - min_x) * point_modifier), max_x),
            self._random_between(int(min_y + (max_y - min_y) * point_modifier), max_y),
        )

    def _random_between(self, low: int, high: int) -> int:
        if high <= low:
            return low
        return self.rng.randint(low, high)


def _inset(boundary_left: Point, boundary_right: Point, offset: int):
    return (
        boundary_left.x + offset,
        boundary_right.x - offset,
        boundary_left.y + offset,
        boundary_right.y - offset,
    )
