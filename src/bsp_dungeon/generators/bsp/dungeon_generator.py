"""
BSP-based dungeon generation.

Runs the stages in order: partition the dungeon area, extract the leaf
partitions, inscribe a room in each leaf, then join sibling structures with
corridors. The result is a flat list of room and corridor rectangles.
"""

import logging
import random
from typing import Dict, List, Optional

from .corridor_generator import CorridorGenerator, DEFAULT_WALL_CLEARANCE
from .partitioner import BinarySpacePartitioner
from .room_generator import RoomGenerator
from .settings import DungeonSettings
from .tree import PartitionTree, TreeNode, extract_leaves

logger = logging.getLogger(__name__)


class DungeonLayout:
    """Everything produced by one generation request"""

    def __init__(self, settings: DungeonSettings, tree: PartitionTree,
                 rooms: List[TreeNode], corridors: List[TreeNode]):
        self.settings = settings
        self.tree = tree
        self.rooms = rooms
        self.corridors = corridors

    @property
    def nodes(self) -> List[TreeNode]:
        """Rooms followed by corridors"""
        return self.rooms + self.corridors

    def get_layout_stats(self) -> Dict:
        """
        Get statistics about the generated layout.

        Returns:
            Dictionary with layout statistics
        """
        internal = self.tree.internal_nodes()
        stats = {
            'room_count': len(self.rooms),
            'corridor_count': len(self.corridors),
            'partition_count': len(self.tree.nodes),
            'split_count': len(internal),
            'missing_corridors': len(internal) - len(self.corridors),
            'tree_depth': self.tree.max_depth,
            'total_room_area': sum(r.bounds.area for r in self.rooms),
            'total_corridor_area': sum(c.bounds.area for c in self.corridors),
            'average_room_size': 0,
            'smallest_room_area': 0,
            'largest_room_area': 0,
        }

        if self.rooms:
            areas = [r.bounds.area for r in self.rooms]
            stats['average_room_size'] = stats['total_room_area'] / len(self.rooms)
            stats['smallest_room_area'] = min(areas)
            stats['largest_room_area'] = max(areas)

        return stats

    def export_layout(self) -> Dict:
        """Dictionary form of the layout, see conversion.layout_export"""
        from ...conversion.layout_export import layout_to_dict
        return layout_to_dict(self)


class DungeonGenerator:
    """
    Generates dungeon layouts using binary space partitioning.

    The generator owns one random number generator. Passing a seed (or a
    ready-made ``random.Random``) makes every call reproducible.
    """

    def __init__(self, dungeon_width: int, dungeon_length: int,
                 seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Initialize the dungeon generator.

        Args:
            dungeon_width: Total width of the dungeon area
            dungeon_length: Total length of the dungeon area
            seed: Seed for a private random generator
            rng: Random generator to use instead of seeding one
        """
        self.dungeon_width = dungeon_width
        self.dungeon_length = dungeon_length
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.last_layout: Optional[DungeonLayout] = None

    def calculate_dungeon(self, max_iterations: int, room_width_min: int, room_length_min: int,
                          room_bottom_corner_modifier: float, room_top_corner_modifier: float,
                          room_offset: int, corridor_width: int,
                          wall_clearance: int = DEFAULT_WALL_CLEARANCE) -> List[TreeNode]:
        """
        Generate a new dungeon.

        Args:
            max_iterations: Maximum number of partition dequeues
            room_width_min: Minimum partition width that may still be split
            room_length_min: Minimum partition length that may still be split
            room_bottom_corner_modifier: Bottom-left corner fraction, 0-0.3
            room_top_corner_modifier: Top-right corner fraction, 0.7-1
            room_offset: Inset of rooms from their partition edges
            corridor_width: Thickness of every corridor
            wall_clearance: Gap kept between corridors and room corners

        Returns:
            Room nodes followed by corridor nodes. Rooms only hold a weak
            reference to their leaf, which stays reachable through
            last_layout until the next call on this generator.

        Raises:
            DungeonConfigError: If any parameter is out of range
        """
        settings = DungeonSettings(
            dungeon_width=self.dungeon_width,
            dungeon_length=self.dungeon_length,
            max_iterations=max_iterations,
            room_width_min=room_width_min,
            room_length_min=room_length_min,
            room_bottom_corner_modifier=room_bottom_corner_modifier,
            room_top_corner_modifier=room_top_corner_modifier,
            room_offset=room_offset,
            corridor_width=corridor_width,
            wall_clearance=wall_clearance,
            seed=self.seed,
        )
        return self.generate(settings).nodes

    def generate(self, settings: DungeonSettings) -> DungeonLayout:
        """Run every stage for already assembled settings"""
        settings.validate()
        logger.info(f"Generating dungeon {settings.dungeon_width}x{settings.dungeon_length} "
                    f"(max_iterations={settings.max_iterations}, seed={settings.seed})")

        partitioner = BinarySpacePartitioner(settings.dungeon_width, settings.dungeon_length, self.rng)
        tree = partitioner.build(settings.max_iterations, settings.room_width_min,
                                 settings.room_length_min)

        room_spaces = extract_leaves(tree.root)
        rooms = RoomGenerator(self.rng).generate_rooms_in_spaces(
            room_spaces,
            settings.room_bottom_corner_modifier,
            settings.room_top_corner_modifier,
            settings.room_offset,
        )

        corridor_generator = CorridorGenerator(self.rng, settings.corridor_width,
                                               settings.wall_clearance)
        corridors = corridor_generator.create_corridors(tree.nodes)

        layout = DungeonLayout(settings, tree, rooms, corridors)
        self.last_layout = layout
        logger.info(f"Generation complete: {len(rooms)} rooms, {len(corridors)} corridors")
        return layout


def generate(settings: DungeonSettings) -> DungeonLayout:
    """
    Generate a layout from settings alone.

    A fresh generator seeded with ``settings.seed`` is used, so equal
    settings with a seed always give equal layouts.
    """
    generator = DungeonGenerator(settings.dungeon_width, settings.dungeon_length, seed=settings.seed)
    return generator.generate(settings)


def generate_dungeon(dungeon_width: int, dungeon_length: int, max_iterations: int,
                     room_width_min: int, room_length_min: int,
                     room_bottom_corner_modifier: float, room_top_corner_modifier: float,
                     room_offset: int, corridor_width: int,
                     seed: Optional[int] = None,
                     wall_clearance: int = DEFAULT_WALL_CLEARANCE) -> List[TreeNode]:
    """
    Single-call form of DungeonGenerator.calculate_dungeon().

    The generator and its partition tree are dropped on return, so
    ``room.parent`` is None on the returned rooms. Use generate() when the
    partitions are needed, e.g. for validate_layout().
    """
    generator = DungeonGenerator(dungeon_width, dungeon_length, seed=seed)
    return generator.calculate_dungeon(
        max_iterations, room_width_min, room_length_min,
        room_bottom_corner_modifier, room_top_corner_modifier,
        room_offset, corridor_width, wall_clearance,
    )
