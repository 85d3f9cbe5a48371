"""
Serialisation of generated layouts.

Exports rooms and corridors as plain dictionaries / JSON so that level
builders in other tools can consume them, and reads the exported form back
into rectangles.
"""

from typing import Any, Dict, List, Tuple
import json
import logging

from ..generators.bsp.dungeon_generator import DungeonLayout
from ..generators.bsp.geometry import Point, Rectangle
from ..generators.bsp.tree import NodeKind, TreeNode

logger = logging.getLogger(__name__)


def _room_to_dict(room_id: int, room: TreeNode) -> Dict[str, Any]:
    leaf = room.parent
    return {
        'id': room_id,
        'kind': room.kind.name.lower(),
        'corners': room.bounds.to_dict(),
        'width': room.width,
        'length': room.length,
        'depth': room.depth,
        'partition': leaf.bounds.to_dict() if leaf is not None else None,
    }


def _corridor_to_dict(corridor_id: int, corridor: TreeNode, room_ids: Dict[int, int]) -> Dict[str, Any]:
    anchor, target = corridor.structures
    return {
        'id': corridor_id,
        'kind': corridor.kind.name.lower(),
        'corners': corridor.bounds.to_dict(),
        'is_vertical': corridor.is_vertical,
        'depth': corridor.depth,
        'start_bounds': corridor.anchor_bounds.to_dict(),
        'end_bounds': corridor.target_bounds.to_dict(),
        # Structures that are single furnished leaves map onto their room id
        'start_room_id': room_ids.get(id(anchor)),
        'end_room_id': room_ids.get(id(target)),
    }


def layout_to_dict(layout: DungeonLayout) -> Dict[str, Any]:
    """
    Convert a layout to a JSON-serializable dictionary.

    Args:
        layout: Result of DungeonGenerator.generate()

    Returns:
        Dictionary with config, stats, rooms and corridors
    """
    room_ids = {}
    rooms = []
    for index, room in enumerate(layout.rooms):
        leaf = room.parent
        if leaf is not None:
            room_ids[id(leaf)] = index
        rooms.append(_room_to_dict(index, room))

    corridors = [
        _corridor_to_dict(index, corridor, room_ids)
        for index, corridor in enumerate(layout.corridors)
    ]

    return {
        'config': layout.settings.to_dict(),
        'stats': layout.get_layout_stats(),
        'rooms': rooms,
        'corridors': corridors,
    }


def layout_to_json(layout: DungeonLayout, indent: int = 2) -> str:
    """Deterministic JSON form of layout_to_dict()"""
    return json.dumps(layout_to_dict(layout), indent=indent, sort_keys=True)


def _rectangle_from_corners(corners: Dict[str, Any]) -> Rectangle:
    bottom_left = corners['bottom_left']
    top_right = corners['top_right']
    return Rectangle(Point(int(bottom_left['x']), int(bottom_left['y'])),
                     Point(int(top_right['x']), int(top_right['y'])))


def rectangles_from_dict(data: Dict[str, Any]) -> List[Tuple[NodeKind, Rectangle]]:
    """
    Read exported layout data back into tagged rectangles.

    Args:
        data: Dictionary produced by layout_to_dict() or parsed from its JSON

    Returns:
        (kind, rectangle) pairs, rooms first

    Raises:
        ValueError: If data is None, not a dict, or an entry is malformed
    """
    if data is None:
        raise ValueError("Layout data is None")
    if not isinstance(data, dict):
        raise ValueError(f"Layout data must be dict, got {type(data)}")
    if 'rooms' not in data:
        raise ValueError("Layout data missing 'rooms' key")

    logger.debug(f"Layout data keys: {list(data.keys())}")

    result: List[Tuple[NodeKind, Rectangle]] = []
    for section, kind in (('rooms', NodeKind.ROOM), ('corridors', NodeKind.CORRIDOR)):
        for i, entry in enumerate(data.get(section, [])):
            try:
                rect = _rectangle_from_corners(entry['corners'])
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Failed to read {section[:-1]} {i}: {e}")
                raise ValueError(f"Malformed {section[:-1]} entry {i}: {e}") from e
            result.append((kind, rect))

    logger.info(f"Read {len(result)} rectangles from layout data")
    return result
