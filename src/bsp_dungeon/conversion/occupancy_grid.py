"""
Occupancy grid conversion for generated layouts.

Rasterises room and corridor rectangles onto a numpy grid of unit cells so
layouts can be inspected, measured and compared cell by cell.
"""

from enum import IntEnum

import numpy as np

from ..generators.bsp.dungeon_generator import DungeonLayout
from ..generators.bsp.geometry import Rectangle


class CellType(IntEnum):
    """Values stored in the occupancy grid"""
    EMPTY = 0
    ROOM = 1
    CORRIDOR = 2


ASCII_GLYPHS = {
    CellType.EMPTY: ' ',
    CellType.ROOM: '.',
    CellType.CORRIDOR: '#',
}


def _fill(grid: np.ndarray, rect: Rectangle, value: CellType) -> None:
    # Rows are Y, columns are X; a rectangle covers cells [x1, x2) x [y1, y2)
    grid[rect.y1:rect.y2, rect.x1:rect.x2] = value


def build_occupancy_grid(layout: DungeonLayout) -> np.ndarray:
    """
    Rasterise a layout.

    Corridors are drawn first so that rooms win where the two touch.

    Args:
        layout: Generated dungeon layout

    Returns:
        int8 array of shape (dungeon_length, dungeon_width) holding CellType values
    """
    settings = layout.settings
    grid = np.zeros((settings.dungeon_length, settings.dungeon_width), dtype=np.int8)
    for corridor in layout.corridors:
        _fill(grid, corridor.bounds, CellType.CORRIDOR)
    for room in layout.rooms:
        _fill(grid, room.bounds, CellType.ROOM)
    return grid


def floor_coverage(grid: np.ndarray) -> float:
    """Fraction of cells covered by rooms or corridors"""
    if grid.size == 0:
        return 0.0
    return float(np.count_nonzero(grid)) / grid.size


def render_ascii(grid: np.ndarray, border: bool = True) -> str:
    """
    Text dump of an occupancy grid for debugging.

    The top row of the output is the far end of the dungeon (highest Y).
    """
    lines = []
    for row in grid[::-1]:
        lines.append(''.join(ASCII_GLYPHS[CellType(int(cell))] for cell in row))

    if border:
        width = grid.shape[1]
        lines = ['+' + '-' * width + '+'] + [f'|{line}|' for line in lines] + ['+' + '-' * width + '+']
    return '\n'.join(lines)
