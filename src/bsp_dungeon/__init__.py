"""
BSP Dungeon - procedural dungeon layouts from binary space partitioning.

Produces non-overlapping room rectangles and the corridor rectangles that
join them, ready to be consumed by a renderer or level builder.
"""

from .generators.bsp import (
    DungeonGenerator,
    DungeonLayout,
    DungeonSettings,
    DungeonConfigError,
    NodeKind,
    Rectangle,
    TreeNode,
    generate,
    generate_dungeon,
)

__all__ = [
    'DungeonGenerator',
    'DungeonLayout',
    'DungeonSettings',
    'DungeonConfigError',
    'NodeKind',
    'Rectangle',
    'TreeNode',
    'generate',
    'generate_dungeon',
]

__version__ = '1.0.0'
