"""
BSP (Binary Space Partitioning) Generator Module

This module provides the core BSP algorithm for procedural dungeon layouts:
space partitioning, leaf extraction, room inscription and corridor synthesis.
"""

from .geometry import (
    Point,
    Rectangle,
    Orientation,
    RelativePosition,
    SplitLine,
    angle_between,
    classify_angle,
    middle_point,
)
from .tree import NodeKind, TreeNode, PartitionTree, extract_leaves
from .partitioner import BinarySpacePartitioner
from .room_generator import RoomGenerator
from .corridor_generator import (
    CorridorGenerator,
    valid_coordinate_for_overlap,
    relative_position,
    CANDIDATE_EDGE_TOLERANCE,
    DEFAULT_WALL_CLEARANCE,
)
from .settings import DungeonSettings, DungeonConfigError, load_settings, save_settings
from .dungeon_generator import DungeonGenerator, DungeonLayout, generate, generate_dungeon

__all__ = [
    'Point',
    'Rectangle',
    'Orientation',
    'RelativePosition',
    'SplitLine',
    'angle_between',
    'classify_angle',
    'middle_point',
    'NodeKind',
    'TreeNode',
    'PartitionTree',
    'extract_leaves',
    'BinarySpacePartitioner',
    'RoomGenerator',
    'CorridorGenerator',
    'valid_coordinate_for_overlap',
    'relative_position',
    'DungeonSettings',
    'DungeonConfigError',
    'load_settings',
    'save_settings',
    'DungeonGenerator',
    'DungeonLayout',
    'generate',
    'generate_dungeon',
    # Constants
    'CANDIDATE_EDGE_TOLERANCE',
    'DEFAULT_WALL_CLEARANCE',
]
